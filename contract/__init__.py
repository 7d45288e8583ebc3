from .api import DeviceApi
from .seeding import RpcSeeder, SeedError, SEED_PROCEDURES

__all__ = [
    "DeviceApi",
    "RpcSeeder",
    "SeedError",
    "SEED_PROCEDURES",
]
