"""Discovery of tool modules and their registration on a FastMCP server.

Modules in the `tools` package expose `get_tools()` returning
`{tool_name: {"func": coroutine, "title": str, "description": str}}`.
A tool function whose first parameter is named `client` gets the shared
FreispaceClient injected; the remaining parameters become its MCP argument
schema.
"""
from dataclasses import dataclass
from importlib import import_module
import inspect
import logging
import pkgutil
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

TOOLS_PACKAGE = "tools"
CLIENT_PARAM = "client"


@dataclass(frozen=True)
class ToolSpec:
    name: str
    func: Callable[..., Any]
    description: str = ""
    title: Optional[str] = None


def specs_from_mapping(mapping: dict[str, Any]) -> list[ToolSpec]:
    specs = []
    for tool_name, meta in mapping.items():
        if isinstance(meta, dict):
            func = meta.get("func")
            title = meta.get("title")
            description = (meta.get("description") or "").strip()
        else:
            # meta must be a callable
            func, title, description = meta, None, ""
        if not func:
            logger.warning(f"Tool {tool_name} did not provide a callable; skipping")
            continue
        specs.append(ToolSpec(name=tool_name, func=func, description=description, title=title))
    return specs


def load_tool_specs(package: str = TOOLS_PACKAGE) -> list[ToolSpec]:
    """Import every public module of `package` and collect its tools.

    Raises ValueError when two modules declare the same tool name.
    """
    pkg = import_module(package)
    specs: list[ToolSpec] = []
    seen: dict[str, str] = {}
    for _, name, _ in pkgutil.iter_modules(pkg.__path__):
        if name.startswith("_"):
            continue
        module_name = f"{package}.{name}"
        mod = import_module(module_name)
        if not hasattr(mod, "get_tools"):
            continue
        logger.info(f"Imported tools module: {module_name}")
        for spec in specs_from_mapping(mod.get_tools()):
            if spec.name in seen:
                raise ValueError(f"Duplicate tool name {spec.name!r} in {module_name} and {seen[spec.name]}")
            seen[spec.name] = module_name
            specs.append(spec)
    return specs


def bind_client(func: Callable[..., Any], client: Any) -> Callable[..., Any]:
    """Return an async wrapper that passes `client` as the first argument when `func` asks for it."""
    sig = inspect.signature(func)
    params = list(sig.parameters.values())
    inject_client = bool(params and params[0].name == CLIENT_PARAM)
    wrapper_params = params[1:] if inject_client else params

    async def _wrapped(**call_kwargs):
        if inject_client:
            return await func(client, **call_kwargs)
        return await func(**call_kwargs)

    _wrapped.__name__ = func.__name__
    _wrapped.__doc__ = func.__doc__
    # no return annotation, so results go back as a single text block
    _wrapped.__signature__ = inspect.Signature(parameters=wrapper_params)
    return _wrapped


def register_tools(mcp: Any, specs: list[ToolSpec], client: Any) -> list[str]:
    """Add each tool to the server once. Returns the registered names in order."""
    registered: list[str] = []
    for spec in specs:
        mcp.add_tool(bind_client(spec.func, client), name=spec.name, title=spec.title, description=spec.description)
        logger.info(f"Added tool via add_tool: {spec.name} (title={spec.title})")
        registered.append(spec.name)
    logger.info(f"Total tools registered: {len(registered)} , tool names: {registered}")
    return registered
