# Copyright 2017, Inderpreet Singh, All rights reserved.

from .types import overrides
from .context import Context, Args
from .error import AppError
from .constants import Constants
from .config import Config, ConfigError
from .persist import Persist, PersistError
from .validation_models import (
    EntryKind,
    ClassifiedEntry,
    PairState,
    PairObservation,
    ValidationStats,
    ValidationResult,
)
