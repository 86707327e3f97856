from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pixelmatch.exceptions import InvalidOption
from pixelmatch.types import Config

logger = logging.getLogger(__name__)


def resolve_config(base: Config | None = None, **options: Any) -> Config:
    """
    Build a Config from named options, layered on top of ``base`` (or the
    defaults). Every given option is applied as is, so
    ``diff_color_alt=None`` clears an alternative color set on ``base``;
    leave an option out to keep the inherited value.
    """
    values: dict[str, Any] = base.model_dump() if base is not None else {}
    values.update(options)

    try:
        config = Config(**values)
    except ValidationError as e:
        raise InvalidOption(_format_validation_error(e)) from e

    logger.debug("pixelmatch.config.resolved", extra=config.model_dump())
    return config


def _format_validation_error(error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "options"
        problems.append(f"{location}: {err['msg']}")
    return "invalid option " + "; ".join(problems)
