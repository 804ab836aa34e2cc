"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class InputFormatError(PipelineError):
    """Raised when a source row cannot be classified (bad price, date or arity)."""

    error_code = "INPUT_FORMAT_ERROR"


class SourceMissingError(PipelineError):
    """Raised when the price paid source file is absent or unreadable."""

    error_code = "SOURCE_MISSING"


class OutputError(PipelineError):
    """Raised when the aggregate cannot be serialised or persisted."""

    error_code = "OUTPUT_ERROR"


class StageError(PipelineError):
    """Raised for stage failures outside of parsing and output."""

    error_code = "STAGE_ERROR"
