# Import all models so Base.metadata sees every table
from assethub.models.asset import Asset

__all__ = ["Asset"]
