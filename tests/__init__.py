"""
Provisor Test Suite

- Unit tests for resources, the collection, providers and the runner
- Inline convergence and provider loading tests
- End-to-end tests for the core pipeline and the CLI
"""
