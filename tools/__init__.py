# tools package for the freispace MCP server
# Modules in this package expose `get_tools() -> dict[str, dict]` mapping tool names to
# {"func", "title", "description"}. core.registry imports every module here and registers
# the returned coroutines as MCP tools, injecting the shared client where a tool asks for it.
__all__ = []
