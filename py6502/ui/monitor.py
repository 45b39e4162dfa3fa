"""Pygame register and memory monitor for the 6502 core."""

from __future__ import annotations

from dataclasses import dataclass

from py6502.bus import Memory
from py6502.cpu import MOS6502, IllegalOpcodeError
from py6502.utils import debug_enabled, debug_log

PAGE_SIZE = 0x100
ROW_BYTES = 16


@dataclass
class MonitorConfig:
    """Window and stepping options for :class:`MonitorApp`."""

    scale: int = 2
    step_cycles: int = 1
    fps: int = 30


class MonitorApp:
    """Single-step the CPU and show its registers next to one memory page."""

    def __init__(self, cpu: MOS6502, memory: Memory, config: MonitorConfig | None = None) -> None:
        self._cpu = cpu
        self._memory = memory
        self._config = config or MonitorConfig()
        self._page = (cpu.state.pc >> 8) & 0xFF
        self._status = "SPACE=step PGUP/PGDN=page ESC=quit"
        self._halted = False
        self._running = False
        self._font = None

    @property
    def page(self) -> int:
        return self._page

    @property
    def halted(self) -> bool:
        return self._halted

    @property
    def status(self) -> str:
        return self._status

    def step(self) -> int:
        """Execute one budget's worth of instructions unless halted."""

        if self._halted:
            return 0
        try:
            used = self._cpu.execute(self._config.step_cycles, self._memory)
        except IllegalOpcodeError as exc:
            self._halted = True
            self._status = f"halted: {exc}"
            return 0
        self._status = f"step used {used} cycles"
        self._page = (self._cpu.state.pc >> 8) & 0xFF
        if debug_enabled("monitor"):
            debug_log("monitor", "step pc=%04x used=%d", self._cpu.state.pc, used)
        return used

    def scroll(self, pages: int) -> None:
        self._page = (self._page + pages) & 0xFF

    def build_lines(self) -> list[str]:
        state = self._cpu.state
        flags = "".join(
            name if enabled else "."
            for name, enabled in (
                ("N", state.n),
                ("V", state.v),
                ("B", state.b),
                ("D", state.d),
                ("I", state.i),
                ("Z", state.z),
                ("C", state.c),
            )
        )
        lines = [
            f"PC {state.pc:04X}  SP {state.sp:02X}",
            f"A {state.a:02X}  X {state.x:02X}  Y {state.y:02X}",
            f"FLAGS {flags}",
            f"CYCLES {self._cpu.cycle_count}",
            "",
        ]

        base = self._page << 8
        data = self._memory.snapshot(base, PAGE_SIZE)
        for offset in range(0, PAGE_SIZE, ROW_BYTES):
            cells = []
            for column in range(ROW_BYTES):
                address = base + offset + column
                text = f"{data[offset + column]:02X}"
                cells.append(f"[{text}]" if address == state.pc else f" {text} ")
            lines.append(f"{base + offset:04X}:" + "".join(cells))

        lines.append("")
        lines.append(self._status)
        return lines

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the monitor") from exc

        pygame.init()
        pygame.display.set_caption("6502 Monitor")

        font_size = max(8, 7 * self._config.scale)
        font_name = pygame.font.match_font("menlo,dejavusansmono,couriernew,consolas,monospace")
        if not font_name:
            font_name = pygame.font.get_default_font()
        self._font = pygame.font.Font(font_name, font_size)
        line_height = font_size + 2

        width = 74 * font_size * 6 // 10 + 8
        height = (len(self.build_lines()) + 1) * line_height
        screen = pygame.display.set_mode((width, height))
        clock = pygame.time.Clock()

        self._running = True
        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key(pygame, event.key)

                screen.fill((0, 0, 0))
                y = 4
                for text in self.build_lines():
                    color = (255, 96, 96) if text.startswith("halted") else (255, 255, 255)
                    rendered = self._font.render(text, False, color)
                    screen.blit(rendered, (4, y))
                    y += line_height
                pygame.display.flip()
                clock.tick(self._config.fps)
        finally:
            pygame.quit()

    def _handle_key(self, pygame, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self._running = False
        elif key == pygame.K_SPACE:
            self.step()
        elif key == pygame.K_PAGEUP:
            self.scroll(-1)
        elif key == pygame.K_PAGEDOWN:
            self.scroll(1)
