"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Pure modules (score_engine, aggregation_service, validation) hold the
scoring and reporting rules; the *_service modules orchestrate them with the
repositories and translate store failures into StoreError.
"""
