# interlinear/core/domain/__init__.py
