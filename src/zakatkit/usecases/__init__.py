"""Async orchestration around the engine: load, compute, persist, notify."""

from .calculate_zakat import CalculateZakatUseCase, GetNisabThresholdUseCase
from .create_asset import CreateAssetUseCase, build_asset
from .create_user import CreateUserUseCase
from .reminders import GenerateHawlRemindersUseCase, ProcessRemindersUseCase

__all__ = [
    "CalculateZakatUseCase",
    "CreateAssetUseCase",
    "CreateUserUseCase",
    "GenerateHawlRemindersUseCase",
    "GetNisabThresholdUseCase",
    "ProcessRemindersUseCase",
    "build_asset",
]
