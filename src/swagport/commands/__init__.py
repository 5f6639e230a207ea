"""Built-in CLI sub-commands (``convert``, ``inspect``, ``config``)."""
