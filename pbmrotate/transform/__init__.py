from .rotation import Canvas, RotationEngine, degrees_to_radians, rotate, rotate_image

__all__ = ["Canvas", "degrees_to_radians", "rotate", "rotate_image", "RotationEngine"]
