"""Domain layer: path mapping and rule documents. No filesystem I/O."""
