# interlinear/core/__init__.py
"""
Core Domain Layer.

Pure business logic and entities:
- No dependencies on frameworks (FastAPI).
- No dependencies on infrastructure (HTTP clients, file system, LLM SDKs).
- Defines Interfaces (Ports) that the Infrastructure layer must implement.
"""
