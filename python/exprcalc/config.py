# ExprCalc - Configuration
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""Configuration settings for ExprCalc."""

from __future__ import annotations
from dataclasses import dataclass
import logging

LOGGER_NAME = "exprcalc"


@dataclass
class Config:
    """
    Configuration for a calculator session.

    Attributes:
        series_label: Label given to every plotted point series.
        output_id: Identifier of the rendering target for plots.
        placeholder: Value returned by plot, and the value the sampling
                     variable is bound to while the plotted expression is
                     checked for undefined variables.
        log_level: Level applied to the package logger by configure_logging().
    """
    series_label: str = "plot"
    output_id: str = "output"
    placeholder: float = 1.0
    log_level: str = "WARNING"

    def __post_init__(self):
        self.placeholder = float(self.placeholder)
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def quiet(cls) -> Config:
        """Only report errors."""
        return cls(log_level="ERROR")

    @classmethod
    def verbose(cls) -> Config:
        """Trace folds, bindings and sampling."""
        return cls(log_level="DEBUG")

    def configure_logging(self) -> logging.Logger:
        """Apply log_level to the package logger and return it."""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(self.log_level)
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%H:%M:%S'
            ))
            logger.addHandler(handler)
        return logger

    def __repr__(self) -> str:
        return (
            f"Config(series_label={self.series_label!r}, "
            f"output_id={self.output_id!r}, "
            f"placeholder={self.placeholder}, "
            f"log_level={self.log_level!r})"
        )
