"""
ティックソース（時刻源）と周期トリガ。

実行ループは待機せずにトリガをポーリングし続けます（ビジーウェイト）。
時刻源を差し替えることで、テストでは実時間を使わずに決定的な検証ができます。
"""
import time
from abc import ABC, abstractmethod

# @intent:responsibility 単調増加する時刻（秒）を提供するインターフェース。
class Clock(ABC):
    @abstractmethod
    def now(self) -> float:
        pass

# @intent:responsibility ホストの単調時計を使う時刻源。
class MonotonicClock(Clock):
    def now(self) -> float:
        return time.perf_counter()

# @intent:responsibility テスト用の手動で進める時刻源。
class VirtualClock(Clock):
    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds

    # @intent:responsibility 時刻を任意の値に設定します（巻き戻りの再現にも使用）。
    def set(self, seconds: float) -> None:
        self._now = seconds


# @intent:responsibility 前回の発火時刻からの経過時間で発火を判定する周期トリガ。
class PeriodicTrigger:
    """
    経過時間が周期以上、または負（時刻源の巻き戻り）であれば発火し、基準時刻を現在時刻に更新します。
    発火しなかった場合は基準時刻を変更しません。
    """
    def __init__(self, period: float, clock: Clock):
        if period <= 0:
            raise ValueError("Trigger period must be positive.")
        self._period = period
        self._clock = clock
        self._previous = clock.now()
        self._last_delta = 0.0

    @classmethod
    def from_frequency(cls, hz: float, clock: Clock) -> "PeriodicTrigger":
        if hz <= 0:
            raise ValueError("Trigger frequency must be positive.")
        return cls(1.0 / hz, clock)

    @property
    def period(self) -> float:
        return self._period

    # @intent:responsibility 直近の発火間隔（秒）。ステータス表示用。
    @property
    def last_delta(self) -> float:
        return self._last_delta

    def poll(self) -> bool:
        current = self._clock.now()
        delta = current - self._previous
        if delta < 0 or delta >= self._period:
            self._previous = current
            self._last_delta = delta
            return True
        return False

    def reset(self) -> None:
        self._previous = self._clock.now()
