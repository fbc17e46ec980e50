"""Feature modules, each registered through the module registry."""
