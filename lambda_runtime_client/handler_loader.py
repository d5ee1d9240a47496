"""Resolution of the user-supplied handler at startup."""

import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import cast

from lambda_runtime_client.exceptions.init_errors import HandlerImportError, HandlerNotFound
from lambda_runtime_client.types import Handler

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "handler"


def parse_handler_string(handler_string: str) -> tuple[str, str]:
    """Split a ``module.function`` handler string on its last dot.

    Args:
        handler_string: Handler string such as ``app.main.handle``.

    Returns:
        Tuple of (module path, export name).

    Raises:
        HandlerNotFound: If the string has no module or no export part.
    """
    module_path, _, export_name = handler_string.strip().rpartition(".")
    if not module_path or not export_name:
        raise HandlerNotFound(
            f"Bad handler '{handler_string}': expected 'module.function'",
            export_name=export_name or None,
        )
    return module_path, export_name


def _import_from_file(module_path: str, task_root: str | None) -> ModuleType:
    """Import a module from a ``.py`` file path relative to the task root."""
    file_path = Path(module_path)
    if not file_path.is_absolute() and task_root:
        file_path = Path(task_root) / file_path

    spec = importlib.util.spec_from_file_location(file_path.stem, file_path)
    if spec is None or spec.loader is None:
        raise HandlerImportError(f"Cannot load handler file {file_path}", module_path=module_path)

    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[spec.name]
        raise
    return module


def import_handler_module(module_path: str, task_root: str | None = None) -> ModuleType:
    """Import the module holding the handler.

    Args:
        module_path: Dotted module name, or a path to a ``.py`` file.
        task_root: Directory added to ``sys.path`` and used to resolve file paths.

    Returns:
        The imported module.

    Raises:
        HandlerImportError: If the module cannot be imported.
    """
    if task_root and task_root not in sys.path:
        sys.path.insert(0, task_root)

    try:
        if module_path.endswith(".py"):
            return _import_from_file(module_path, task_root)
        return importlib.import_module(module_path.replace("/", "."))
    except HandlerImportError:
        raise
    except Exception as error:
        raise HandlerImportError(
            f"Unable to import module '{module_path}': {error}",
            module_path=module_path,
        ) from error


def resolve_handler(module: ModuleType, export_name: str) -> Handler:
    """Resolve the handler export, falling back to the default export.

    Args:
        module: Module holding the handler.
        export_name: Name of the requested export.

    Returns:
        The handler callable.

    Raises:
        HandlerNotFound: If neither export exists or is callable.
    """
    for name in (export_name, DEFAULT_EXPORT_NAME):
        candidate = getattr(module, name, None)
        if callable(candidate):
            if name != export_name:
                logger.warning(
                    "Export %s not found in %s, using default export %s",
                    export_name,
                    module.__name__,
                    DEFAULT_EXPORT_NAME,
                )
            return cast(Handler, candidate)

    raise HandlerNotFound(
        f"Handler function not found: {export_name}",
        module_path=module.__name__,
        export_name=export_name,
    )


def load_handler(
    module_path: str,
    export_name: str,
    task_root: str | None = None,
) -> Handler:
    """Load the handler once, before the invocation loop starts.

    Args:
        module_path: Dotted module name, or a path to a ``.py`` file.
        export_name: Name of the handler function in the module.
        task_root: Directory holding the function code.

    Returns:
        The resolved handler callable.

    Raises:
        HandlerImportError: If the module cannot be imported.
        HandlerNotFound: If no handler can be resolved from the module.
    """
    module = import_handler_module(module_path, task_root)
    handler = resolve_handler(module, export_name)
    logger.info("Loaded handler %s.%s", module_path, export_name)
    return handler
