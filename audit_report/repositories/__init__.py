"""레포지토리 패키지 — 레코드 저장소 쿼리 계층.

Repository package — Record store query layer.
One repository per collection; each extends BaseRepository for insert,
equality-filtered reads and existence checks.
"""
