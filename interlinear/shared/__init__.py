# interlinear/shared/__init__.py
"""
Shared utilities package.

Cross-cutting concerns used by both the core and the adapters:
- Configuration management
- Structured logging
- Distributed tracing
- Resilience patterns (Circuit Breaker, retries)
- Dependency Injection wiring
"""
