"""Seed-time data import: legacy id mapping and the idempotent seeder."""

from foodies.seeding.identity import NAMESPACE, mongo_id_to_uuid
from foodies.seeding.seeder import Seeder, SeedReport


__all__ = ["NAMESPACE", "SeedReport", "Seeder", "mongo_id_to_uuid"]
