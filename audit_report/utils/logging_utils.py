"""로깅 설정 모듈.

Centralized stdlib logging configuration for service-level events
(submissions, conflicts, store failures). Request/response logging to Axiom
is handled separately by ``audit_report.middleware.axiom_logging``.
"""

import logging

LOGGER_NAME: str = "audit_report"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """애플리케이션 로거를 설정하고 반환합니다. 여러 번 호출해도 핸들러는 하나."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(handler)

    logger.debug("Logging initialized at %s level", level.upper())
    return logger


def get_logger(name: str) -> logging.Logger:
    """``audit_report`` 하위 로거를 반환합니다."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
