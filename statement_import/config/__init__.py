"""Configuration management."""
from .settings import *
from .profile_loader import StatementProfile, ProfileLoader, get_profile_loader

__all__ = ['StatementProfile', 'ProfileLoader', 'get_profile_loader']
