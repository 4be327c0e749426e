"""Pydantic schema for the parameters of a surfing run.

The acceptance predicates are also exposed as plain functions so that the
interactive prompts and the argparse layer check exactly the same ranges.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

#: Inclusive bounds shared by every numeric run parameter.
MIN_VALUE: int = 1
MAX_VALUE: int = 60


def batch_size_ok(value: int) -> bool:
    """Return ``True`` if ``value`` is an acceptable batch size."""
    return MIN_VALUE <= value <= MAX_VALUE


def max_open_tabs_ok(value: int, batch_size: int) -> bool:
    """Return ``True`` if ``value`` can hold at least one full batch of ``batch_size``."""
    return batch_size <= value <= MAX_VALUE


def wait_seconds_ok(value: int) -> bool:
    """Return ``True`` if ``value`` is an acceptable pause length."""
    return MIN_VALUE <= value <= MAX_VALUE


class RunConfig(BaseModel):
    """Validated parameters of one surfing run.

    Attributes:
        batch_size: Tabs opened concurrently per batch.
        max_open_tabs: Upper bound on live tabs; never below ``batch_size``.
        wait_seconds: Pause after each navigation and between batches.
    """

    model_config = ConfigDict(frozen=True)

    batch_size: int = Field(ge=MIN_VALUE, le=MAX_VALUE)
    max_open_tabs: int = Field(ge=MIN_VALUE, le=MAX_VALUE)
    wait_seconds: int = Field(ge=MIN_VALUE, le=MAX_VALUE)

    @model_validator(mode="after")
    def _window_holds_a_batch(self) -> "RunConfig":
        if not max_open_tabs_ok(self.max_open_tabs, self.batch_size):
            raise ValueError(
                f"max_open_tabs ({self.max_open_tabs}) must be between "
                f"batch_size ({self.batch_size}) and {MAX_VALUE}"
            )
        return self
