"""Game entities and component factories."""
from .trails import Trail, TrailPoint, Closure
from .sprites import Sprite, Spark, Enemy, Shape, ShapeKind, create_spark, create_enemy, create_particle

__all__ = [
    'Trail', 'TrailPoint', 'Closure',
    'Sprite', 'Spark', 'Enemy', 'Shape', 'ShapeKind',
    'create_spark', 'create_enemy', 'create_particle',
]
