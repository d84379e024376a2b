# src/retro_chip8/timing/controller.py
"""
タイミングコントローラ。

命令実行ティック（約1024Hz）とタイマー/画面更新ティック（60Hz）という
2つの独立した周期イベントを、単一スレッドのポーリングループから駆動します。
"""
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from retro_chip8.core.snapshot import Snapshot
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.debugger.debugger import Debugger
from retro_chip8.timing.clock import Clock, MonotonicClock, PeriodicTrigger
from retro_chip8.ui.surface import DisplaySurface, ToneSignal, NullDisplay, NullTone

DEFAULT_INSTRUCTION_HZ = 1024.0
DEFAULT_TIMER_HZ = 60.0

# @intent:data_structure run_onceの1反復で何が起きたかを記録します。
@dataclass(frozen=True)
class TickResult:
    stepped: bool
    refreshed: bool
    tone: bool = False
    snapshot: Optional[Snapshot] = None
    breakpoint: bool = False


# @intent:responsibility 2つの周期トリガを評価し、CPUの命令実行とタイマー減算・画面更新・トーン発生を振り分けます。
class TimingController:
    """
    run_once() は1回のポーリング反復を行い、決してブロックしません。
    run() はそれを待機なしで繰り返すビジーウェイトループです。
    """
    def __init__(self, cpu: Chip8Cpu, display: Optional[DisplaySurface] = None, tone: Optional[ToneSignal] = None,
                 clock: Optional[Clock] = None, instruction_hz: float = DEFAULT_INSTRUCTION_HZ,
                 timer_hz: float = DEFAULT_TIMER_HZ, debugger: Optional[Debugger] = None):
        self._cpu = cpu
        self._display = display if display is not None else NullDisplay()
        self._tone = tone if tone is not None else NullTone()
        self._clock = clock if clock is not None else MonotonicClock()
        self._instruction_trigger = PeriodicTrigger.from_frequency(instruction_hz, self._clock)
        self._timer_trigger = PeriodicTrigger.from_frequency(timer_hz, self._clock)
        self._debugger = debugger
        self._running = False

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def debugger(self) -> Optional[Debugger]:
        return self._debugger

    @property
    def instruction_trigger(self) -> PeriodicTrigger:
        return self._instruction_trigger

    @property
    def timer_trigger(self) -> PeriodicTrigger:
        return self._timer_trigger

    # @intent:responsibility 60Hzティックの処理: タイマー減算、画面描画、必要ならトーン発生。
    def refresh(self) -> bool:
        tone = self._cpu.tick_timers()
        self._display.render(self._cpu.get_framebuffer())
        if tone:
            self._tone.beep()
        return tone

    # @intent:responsibility 1命令を実行します。デバッガがあればデバッガ経由で実行し、ブレークポイントも照合します。
    def step(self) -> Tuple[Snapshot, bool]:
        if self._debugger is None:
            return self._cpu.step(), False
        snapshot = self._debugger.step_instruction()
        return snapshot, self._debugger.check_breakpoints(snapshot)

    def run_once(self) -> TickResult:
        snapshot = None
        hit = False
        stepped = self._instruction_trigger.poll()
        if stepped:
            snapshot, hit = self.step()

        refreshed = self._timer_trigger.poll()
        tone = self.refresh() if refreshed else False
        return TickResult(stepped=stepped, refreshed=refreshed, tone=tone, snapshot=snapshot, breakpoint=hit)

    # @intent:responsibility should_continueがFalseを返すか、stop()が呼ばれるか、ブレークポイントにヒットするまで待機なしでrun_onceを繰り返します。
    # @intent:post-condition Chip8Error（未定義命令など）は捕捉せずに呼び出し元へ伝播します。ブレークポイントで止まった場合はTrueを返します。
    def run(self, should_continue: Callable[[], bool] = lambda: True) -> bool:
        self._running = True
        while self._running and should_continue():
            if self.run_once().breakpoint:
                self._running = False
                return True
        return False

    def stop(self) -> None:
        self._running = False
