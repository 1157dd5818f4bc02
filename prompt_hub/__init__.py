"""prompt-hub.

This package contains a client-side prompt cache and template compiler for a
remote prompt-management service (the Langfuse public prompts API).

High-level architecture
-----------------------

- **Cache and refresh**: prompts are fetched by name and kept in a
  process-local cache. A cache hit is served immediately while the prompt is
  re-fetched in the background (stale-while-revalidate); a cache miss is
  fetched synchronously.
- **Compilation**: a cached prompt body (text, or a list of chat messages) is
  compiled against ``{{variable}}`` bindings. Supplying a variable that the
  prompt never references is an error.

Core subpackages
----------------

- ``prompt_hub.prompt``: the prompt client facade, cache, refresh
  coordinator, compiler, HTTP source and models.
- ``prompt_hub.core``: configuration and logging helpers.

Typical workflow
----------------

1. Build a client with ``prompt_hub.prompt.load_prompt_client()``.
2. ``compiler = client.get("support/triage")``.
3. ``compiler.compile_chat({"persona": "a pirate"})``.
"""
