import pyglet
from pyglet.window import key

from .config import FRAME_HZ, HEIGHT, SCALE, WIDTH
from .display import to_rgba
from .errors import Chip8Error
from .log import logger, toggle_logs
from .timing import cycles_per_frame

log = logger.getChild("window")

# map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Chip8Window(pyglet.window.Window):
    """pyglet front end: feeds keys in, drives cycles, blits the framebuffer."""

    def __init__(self, machine, scale=SCALE):
        super().__init__(
            width=WIDTH * scale,
            height=HEIGHT * scale,
            caption="CHIP-8 Emulator",
            vsync=False
        )
        self.machine = machine
        self.scale = scale

        # pyglet's clock paces whole frames, so cycles run unpaced inside a tick;
        # uncapped machines get half of each frame interval instead
        self.cycles_per_frame = cycles_per_frame(machine.pacer.hz)
        self.uncapped_slice = 0.5 / FRAME_HZ

        # creating ImageData once, updated in place on every redraw
        frame = to_rgba(machine.state.display, scale)
        self.image = pyglet.image.ImageData(self.width, self.height, 'RGBA', frame.tobytes())

        pyglet.clock.schedule_interval(self._cpu_tick, 1.0 / FRAME_HZ)

    # ---- CPU cycle ----
    def _cpu_tick(self, dt):
        if self.machine.halted:
            return
        try:
            if self.cycles_per_frame is None:
                self.machine.run_for(self.uncapped_slice)
            else:
                for _ in range(self.cycles_per_frame):
                    self.machine.step()
        except Chip8Error as e:
            log.error("Stopping: %s", e)
            self.close()

    # ---- Drawing ----
    def on_draw(self):
        self.clear()
        state = self.machine.state
        if state.draw_flag:
            frame = to_rgba(state.display, self.scale)
            self.image.set_data('RGBA', self.width * 4, frame.tobytes())
            state.draw_flag = False
        self.image.blit(0, 0)

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.F1:
            toggle_logs()
        elif symbol in keymap:
            self.machine.state.press(keymap[symbol])

    def on_key_release(self, symbol, modifiers):
        if symbol in keymap:
            self.machine.state.release(keymap[symbol])

    def on_close(self):
        pyglet.clock.unschedule(self._cpu_tick)
        super().on_close()


def run_window(machine, scale=SCALE):
    Chip8Window(machine, scale)
    pyglet.app.run()
