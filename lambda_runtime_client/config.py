"""Runtime configuration using Pydantic BaseSettings.

All settings are loaded from the environment variables the Lambda
execution environment provides to a custom runtime.

Usage:
    from lambda_runtime_client.config import get_settings

    settings = get_settings()
    print(settings.runtime_api_base_url)
    print(settings.handler)
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RUNTIME_API_VERSION = "2018-06-01"


class RuntimeSettings(BaseSettings):
    """Runtime settings loaded from environment variables.

    Attributes:
        aws_lambda_runtime_api: Host and port of the Runtime API.
        handler: Handler string in ``module.function`` form.
        lambda_task_root: Directory holding the function code.
        aws_lambda_function_name: Function name, copied into each context.
        aws_lambda_function_version: Function version, copied into each context.
        aws_lambda_function_memory_size: Memory limit in MB, copied into each context.
        aws_lambda_log_group_name: CloudWatch log group of the function.
        aws_lambda_log_stream_name: CloudWatch log stream of this environment.
        response_timeout_seconds: Timeout for posting responses and errors.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    # Runtime API
    aws_lambda_runtime_api: str = Field(min_length=1)
    response_timeout_seconds: int = Field(default=30, ge=1, le=300)

    # Handler resolution
    handler: str = Field(
        default="",
        validation_alias=AliasChoices("_HANDLER", "handler"),
    )
    lambda_task_root: str = Field(default="/var/task")

    # Informational function metadata
    aws_lambda_function_name: str = Field(default="")
    aws_lambda_function_version: str = Field(default="$LATEST")
    aws_lambda_function_memory_size: str = Field(default="")
    aws_lambda_log_group_name: str = Field(default="")
    aws_lambda_log_stream_name: str = Field(default="")

    @property
    def runtime_api_base_url(self) -> str:
        """Base URL of the Runtime API, without a trailing slash."""
        return f"http://{self.aws_lambda_runtime_api}/{RUNTIME_API_VERSION}/runtime"


@lru_cache
def get_settings() -> RuntimeSettings:
    """Get cached settings instance.

    Returns:
        Cached RuntimeSettings instance.
    """
    return RuntimeSettings()
