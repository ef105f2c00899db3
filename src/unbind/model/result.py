# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Ok[T]:
    value: T


@dataclass(frozen=True)
class Err:
    reason: str
    error: Optional[Exception] = None


type Result[T] = Ok[T] | Err
