# ExprCalc - Configuration Tests
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""
Tests for the configuration module and the exception hierarchy.
"""

import logging

import pytest

from exprcalc.config import LOGGER_NAME, Config
from exprcalc.exceptions import (
    AlreadyBoundVariableError,
    ArityError,
    CalculatorError,
    CyclicDefinitionError,
    EvaluationError,
    ExpressionError,
    FreeVariableInPlotBodyError,
    InvalidPlotVariableError,
    InvalidRangeError,
    NonPositiveStepError,
    UndefinedVariableError,
    UnknownOperationError,
)


class TestConfig:
    """Tests for the Config class."""

    def test_default_values(self):
        cfg = Config()
        assert cfg.series_label == "plot"
        assert cfg.output_id == "output"
        assert cfg.placeholder == 1.0
        assert cfg.log_level == "WARNING"

    def test_placeholder_float_conversion(self):
        cfg = Config(placeholder=2)
        assert isinstance(cfg.placeholder, float)

    def test_log_level_normalized(self):
        assert Config(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            Config(log_level="chatty")

    def test_presets(self):
        assert Config.quiet().log_level == "ERROR"
        assert Config.verbose().log_level == "DEBUG"

    def test_configure_logging(self):
        logger = Config.verbose().configure_logging()
        assert logger is logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.DEBUG
        handlers = len(logger.handlers)
        Config.quiet().configure_logging()
        assert logger.level == logging.ERROR
        assert len(logger.handlers) == handlers

    def test_repr(self):
        assert "series_label='plot'" in repr(Config())


class TestExceptionHierarchy:
    """Every error can be caught through the package base class."""

    @pytest.mark.parametrize("error", [
        UndefinedVariableError('x'),
        UnknownOperationError('tan'),
        InvalidRangeError(5.0, 2.0),
        AlreadyBoundVariableError('x'),
        NonPositiveStepError(0.0),
        FreeVariableInPlotBodyError(['y']),
        CyclicDefinitionError(['a', 'a']),
    ])
    def test_evaluation_errors(self, error):
        assert isinstance(error, EvaluationError)
        assert isinstance(error, CalculatorError)

    @pytest.mark.parametrize("error", [
        ArityError('+', 2, 1),
        InvalidPlotVariableError('1'),
    ])
    def test_expression_errors(self, error):
        assert isinstance(error, ExpressionError)
        assert isinstance(error, CalculatorError)

    def test_messages(self):
        assert "min 5.0 > max 2.0" in str(InvalidRangeError(5.0, 2.0))
        assert "a -> b -> a" in str(CyclicDefinitionError(['a', 'b', 'a']))
        assert "'y', 'z'" in str(FreeVariableInPlotBodyError(['z', 'y']))

    def test_unknown_operation_suggestions(self):
        assert UnknownOperationError('pow').suggestion is not None
        assert UnknownOperationError('ToDouble').suggestion is not None
        assert UnknownOperationError('frobnicate').suggestion is None
