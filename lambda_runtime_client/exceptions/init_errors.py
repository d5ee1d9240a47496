"""Initialization errors (fatal, reported to the init error endpoint)."""

from typing import Any, ClassVar

from lambda_runtime_client.exceptions.base import RuntimeClientError


class InitError(RuntimeClientError):
    """Base class for failures before the first poll."""

    error_code: ClassVar[str] = "Runtime.InitError"


class HandlerNotFound(InitError):
    """Neither the named export nor the default export could be resolved."""

    error_code: ClassVar[str] = "Runtime.HandlerNotFound"

    def __init__(
        self,
        message: str,
        *,
        module_path: str | None = None,
        export_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize handler-not-found error.

        Args:
            message: Description of the failure.
            module_path: Module the handler was looked up in.
            export_name: Name of the requested export.
            context: Additional context information.
        """
        context_dict = context or {}
        if module_path is not None:
            context_dict["module_path"] = module_path
        if export_name is not None:
            context_dict["export_name"] = export_name
        super().__init__(message, context=context_dict)


class HandlerImportError(InitError):
    """The handler module could not be imported."""

    error_code: ClassVar[str] = "Runtime.ImportModuleError"

    def __init__(
        self,
        message: str,
        *,
        module_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize handler import error.

        Args:
            message: Description of the failure.
            module_path: Module that failed to import.
            context: Additional context information.
        """
        context_dict = context or {}
        if module_path is not None:
            context_dict["module_path"] = module_path
        super().__init__(message, context=context_dict)
