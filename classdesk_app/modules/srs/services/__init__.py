from .srs_service import SrsService
from .state_repository import SrsStateRepository

__all__ = ['SrsService', 'SrsStateRepository']
