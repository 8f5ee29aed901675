"""
通用数据结构：ScoreMode、SchedulerArgs、GangRequest、NodeScore、Status
"""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .constants import (DEFAULT_MODE, GROUP_NAME_LABEL, LEAST_MODE,
                        MIN_AVAILABLE_LABEL, MOST_MODE)
from .errors import ConfigError


class ScoreMode(enum.Enum):
    LEAST = LEAST_MODE
    MOST = MOST_MODE

    @classmethod
    def parse(cls, value: str) -> "ScoreMode":
        try:
            return cls(value)
        except ValueError:
            raise ConfigError(f"invalid mode, got {value!r}") from None


@dataclass(frozen=True)
class SchedulerArgs:
    """插件构造参数；构造后不可变"""
    mode: ScoreMode = ScoreMode(DEFAULT_MODE)


def load_args(raw: bytes | str | Mapping[str, Any] | None) -> SchedulerArgs:
    """
    把 kube-scheduler 传入的 plugin args 转成 SchedulerArgs。
      • None           → 默认 Least
      • bytes / str    → JSON 文档 {"mode": ...}
      • Mapping        → 已解析的 dict
    mode 缺失或非法时抛 ConfigError。
    """
    if raw is None:
        return SchedulerArgs()
    if isinstance(raw, (bytes, str)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ConfigError(f"failed to decode plugin args: {e}") from e
    if not isinstance(raw, Mapping):
        raise ConfigError(f"plugin args must be an object, got {type(raw).__name__}")
    return SchedulerArgs(mode=ScoreMode.parse(raw.get("mode", "")))


@dataclass(frozen=True)
class GangRequest:
    """从 Pod label 解析出的 gang 信息"""
    group: str
    min_available: int

    @classmethod
    def from_labels(cls, labels: Mapping[str, str]) -> "GangRequest":
        group = labels.get(GROUP_NAME_LABEL, "")
        raw_min = labels.get(MIN_AVAILABLE_LABEL)
        if raw_min is None:
            raise ConfigError(f"Invalid minAvailable value: label {MIN_AVAILABLE_LABEL!r} is missing")
        # 只接受十进制非负整数（"-1"、"1_000"、" 3" 均非法）
        if not (raw_min.isascii() and raw_min.isdigit()):
            raise ConfigError(f"Invalid minAvailable value: {raw_min!r} is not a non-negative integer")
        return cls(group=group, min_available=int(raw_min))

    @property
    def selector(self) -> Dict[str, str]:
        return {GROUP_NAME_LABEL: self.group}


@dataclass
class NodeScore:
    name: str
    score: int


class Code(enum.Enum):
    SUCCESS = "Success"
    UNSCHEDULABLE = "Unschedulable"
    ERROR = "Error"


@dataclass(frozen=True)
class Status:
    code: Code = Code.SUCCESS
    reason: str = ""

    @property
    def is_success(self) -> bool:
        return self.code is Code.SUCCESS

    @classmethod
    def success(cls) -> "Status":
        return cls(Code.SUCCESS)

    @classmethod
    def unschedulable(cls, reason: str) -> "Status":
        return cls(Code.UNSCHEDULABLE, reason)

    @classmethod
    def error(cls, reason: str) -> "Status":
        return cls(Code.ERROR, reason)
