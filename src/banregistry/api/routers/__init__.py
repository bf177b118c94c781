from . import communes, composition, tiles

__all__ = ["communes", "composition", "tiles"]
