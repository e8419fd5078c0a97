from __future__ import annotations

import json
import logging
import os
from logging.config import dictConfig
from traceback import format_exception

from svc_store.app.core.env import Env, get_env
from svc_store.exceptions import StoreKitError


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter for prod and CI logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, object] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "pid": record.process,
            "message": record.getMessage(),
        }

        # Storage / store context, only when the caller passed it via extra=
        ctx = {
            k: v for k, v in {
                "collection": getattr(record, "collection", None),
                "stored_filename": getattr(record, "stored_filename", None),
                "storage_location": getattr(record, "storage_location", None),
            }.items() if v is not None
        }
        if ctx:
            payload["context"] = ctx

        if record.exc_info:
            exc_type, exc, _tb = record.exc_info
            err_obj: dict[str, object] = {}
            if exc_type:
                err_obj["type"] = exc_type.__name__
            if exc is not None:
                err_obj["message"] = str(exc)
            if isinstance(exc, StoreKitError):
                err_obj["kind"] = exc.kind.value
                err_obj["code"] = exc.code

            stack = "".join(format_exception(*record.exc_info))
            max_stack = int(os.getenv("LOG_STACK_LIMIT", "4000"))
            err_obj["stack"] = stack[:max_stack] + ("...(truncated)" if len(stack) > max_stack else "")

            payload["error"] = err_obj

        return json.dumps(payload, ensure_ascii=False, default=str)


def read_level(env: Env | None = None) -> str:
    explicit = os.getenv("LOG_LEVEL")
    if explicit:
        return explicit.upper()
    return "INFO" if (env or get_env()) is Env.PROD else "DEBUG"


def read_format(env: Env | None = None) -> str:
    fmt = os.getenv("LOG_FORMAT")
    if fmt:
        return fmt.lower()
    return "json" if (env or get_env()) is Env.PROD else "plain"


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    level = (level or read_level()).upper()
    fmt = (fmt or read_format()).lower()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {
                    "format": "%(asctime)s %(levelname)-5s [pid:%(process)d] %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
            },
            "handlers": {
                "stream": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "json" if fmt == "json" else "plain",
                }
            },
            "root": {
                "level": level,
                "handlers": ["stream"],
            },
            # Driver chatter stays at WARNING unless LOG_LEVEL says otherwise
            "loggers": {
                "pymongo": {"level": "WARNING", "handlers": [], "propagate": True},
                "motor": {"level": "WARNING", "handlers": [], "propagate": True},
            },
        }
    )
