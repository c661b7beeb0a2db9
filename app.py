#!/usr/bin/env python
# =======================================================================
# app.py  –  Poynting Canvas  (2026‑10‑18  ·  v1.0 - E / B / S overlays)
# =======================================================================
#
# Animated source + lamp circuit with electric field, magnetic field and
# energy-flow (Poynting) overlays. Window size and engine tuning are read
# from config.cfg.
#
# Shortcuts (Full legend: T key)
#   A=AC/DC, E/B/P=Toggle fields, Up/Down=Voltage, Left/Right=Resistance,
#   [ ]=Frequency, R=Restart clock, Space=Pause, T=Legend, Esc/Q=Quit
# -----------------------------------------------------------------------
from __future__ import annotations
from dataclasses import replace

import pygame as pg

from poynting_canvas import Animator, CircuitConfiguration, DomainError, Field, Mode, PygameSurface, load_config
from poynting_canvas.circuit import FIELD_LBL, MODE_LBL, clamp

settings = load_config()

V_STEP, R_STEP, F_STEP = 1.0, 1.0, 0.1

INFO_BG_C   = (28, 30, 32)
INFO_LINE_C = (60, 65, 70)
STATUS_C    = (220, 220, 255)
ON_C, OFF_C = (120, 255, 120), (110, 110, 120)
LEGEND_C    = (170, 170, 190)


# ───────── APP ────────────
class App:
    def __init__(self):
        pg.init()
        self.font = pg.font.SysFont("DejaVu Sans Mono, Consolas, monospace", int(15*settings.font_scale))
        self.font_tiny = pg.font.SysFont("DejaVu Sans Mono, Consolas, monospace", int(11*settings.font_scale))
        self.scr = pg.display.set_mode(settings.window_size, pg.RESIZABLE)
        pg.display.set_caption("Poynting Canvas v1.0 (E, B, S = E x B)")
        self.clock = pg.time.Clock()

        self.config = CircuitConfiguration(
            mode=Mode.DC,
            source_voltage=clamp(settings.voltage, *settings.v_range),
            load_resistance=clamp(settings.resistance, *settings.r_range),
            frequency=clamp(settings.frequency, *settings.f_range),
        )
        self.paused = False
        self.show_help = False
        self.status = "A=AC/DC  E/B/P=Fields  T=Legend"
        self.last_frame = None

        self.canvas = PygameSurface(self._canvas_subsurface(), settings.font_scale)
        self.animator = Animator(settings)
        self.animator.start(self.canvas)

    def _canvas_subsurface(self) -> pg.Surface:
        w, h = self.scr.get_size()
        return self.scr.subsurface((0, 0, w, max(0, h - settings.info_h)))

    def run(self):
        """Main application loop. The simulation clock advances one fixed step per frame."""
        print("Poynting Canvas started.")
        while self.animator.running:
            self.clock.tick(settings.fps)
            self.handle_events()
            if not self.animator.running: break
            self.draw()
        print("Poynting Canvas stopped.")

    def handle_events(self):
        for e in pg.event.get():
            if e.type == pg.QUIT:
                self.animator.stop()
                return

            if e.type == pg.VIDEORESIZE:
                # between frames only; the engine re-reads the size at the start of the next one
                self.scr = pg.display.set_mode((max(e.w, 200), max(e.h, settings.info_h + 50)), pg.RESIZABLE)
                self.canvas.surf = self._canvas_subsurface()
                continue

            if e.type != pg.KEYDOWN: continue

            if e.key in (pg.K_ESCAPE, pg.K_q):
                if self.show_help: self.show_help = False; self.status = "Legend closed."
                else: self.animator.stop(); return

            elif e.key == pg.K_a:
                mode = Mode.DC if self.config.is_ac else Mode.AC
                self.config = self.config.with_mode(mode)
                self.status = f"{MODE_LBL[mode]} source."
            elif e.key in (pg.K_e, pg.K_b, pg.K_p):
                f = {pg.K_e:Field.ELECTRIC, pg.K_b:Field.MAGNETIC, pg.K_p:Field.POYNTING}[e.key]
                self.config = self.config.toggled(f)
                self.status = f"{FIELD_LBL[f]} field {'on' if self.config.shows(f) else 'off'}."

            elif e.key in (pg.K_UP, pg.K_DOWN):
                v = self.config.source_voltage + (V_STEP if e.key == pg.K_UP else -V_STEP)
                self.config = replace(self.config, source_voltage=clamp(v, *settings.v_range))
                self.status = f"Voltage {self.config.source_voltage:.3g}V"
            elif e.key in (pg.K_RIGHT, pg.K_LEFT):
                r = self.config.load_resistance + (R_STEP if e.key == pg.K_RIGHT else -R_STEP)
                self.config = replace(self.config, load_resistance=clamp(r, *settings.r_range))
                self.status = f"Resistance {self.config.load_resistance:.3g}Ω"
            elif e.key in (pg.K_LEFTBRACKET, pg.K_RIGHTBRACKET):
                f_hz = self.config.frequency + (F_STEP if e.key == pg.K_RIGHTBRACKET else -F_STEP)
                self.config = replace(self.config, frequency=round(clamp(f_hz, *settings.f_range), 3))
                self.status = f"Frequency {self.config.frequency:.3g}Hz"

            elif e.key == pg.K_r:
                self.animator.restart(); self.status = "Clock restarted."
            elif e.key == pg.K_SPACE:
                self.paused = not self.paused
                self.status = "Paused." if self.paused else "Running."
            elif e.key in (pg.K_t, pg.K_h):
                self.show_help = not self.show_help

    def draw(self):
        """Main drawing function."""
        try:
            self.last_frame = self.animator.frame(self.config, advance=not self.paused)
        except DomainError as e:
            # host clamps keep V, R and f in range; anything else is a bug
            self.animator.stop()
            raise SystemExit(f"Invalid circuit configuration: {e}") from e

        self.draw_info_bar()
        if self.show_help: self.draw_legend()
        else: self.draw_mini_legend()
        pg.display.flip()

    def draw_info_bar(self):
        w, h = self.scr.get_size()
        bar_r = pg.Rect(0, h - settings.info_h, w, settings.info_h)
        pg.draw.rect(self.scr, INFO_BG_C, bar_r)
        pg.draw.line(self.scr, INFO_LINE_C, bar_r.topleft, bar_r.topright, 2)

        c, fr = self.config, self.last_frame
        pad = 10
        line1 = f"{MODE_LBL[c.mode]}  V={c.source_voltage:.3g}V  R={c.load_resistance:.3g}Ω"
        if c.is_ac: line1 += f"  f={c.frequency:.3g}Hz"
        if fr is not None:
            s = fr.state
            line1 += f"  |  I={s.current:.3g}A  P={s.power:.3g}W  i(t)={s.instantaneous_current:+.3f}A  p(t)={s.instantaneous_power:.3f}W  t={fr.t:.2f}s"
        surf = self.font.render(line1, True, STATUS_C)
        self.scr.blit(surf, (pad, bar_r.top + pad))

        x = pad
        for f in (Field.ELECTRIC, Field.MAGNETIC, Field.POYNTING):
            fs = self.font.render(f"[{FIELD_LBL[f]}]", True, ON_C if c.shows(f) else OFF_C)
            self.scr.blit(fs, (x, bar_r.top + pad + surf.get_height() + 6)); x += fs.get_width() + 8
        st = self.font.render(self.status, True, STATUS_C)
        self.scr.blit(st, (x + 10, bar_r.top + pad + surf.get_height() + 6))

    def draw_mini_legend(self):
        """Small always-visible key list in the bottom right corner."""
        lines = ["A: AC/DC", "E B P: Fields", "T: Legend", "Esc: Quit"]
        w, h = self.scr.get_size()
        line_h = self.font_tiny.get_linesize()
        y = h - 5 - len(lines)*line_h
        for i, text in enumerate(lines):
            surf = self.font_tiny.render(text, True, LEGEND_C)
            self.scr.blit(surf, surf.get_rect(right=w - 5, top=y + i*line_h))

    def draw_legend(self):
        items = [("A", "Toggle AC / DC source"), ("E", "Electric field (E)"), ("B", "Magnetic field (B)"),
                 ("P", "Poynting vector (S = E x B)"), ("Up/Down", "Source voltage"),
                 ("Left/Right", "Load resistance"), ("[ / ]", "AC frequency"), ("R", "Restart clock"),
                 ("Space", "Pause / resume"), ("T", "Close legend"), ("Esc / Q", "Quit")]
        line_h = self.font.get_linesize()
        key_w = max(self.font.size(k)[0] for k, _ in items)
        desc_w = max(self.font.size(d)[0] for _, d in items)
        box = pg.Surface((key_w + desc_w + 60, len(items)*line_h + 50), pg.SRCALPHA)
        pg.draw.rect(box, (30, 35, 40, 235), box.get_rect(), border_radius=8)
        pg.draw.rect(box, (120, 140, 160, 230), box.get_rect(), 2, border_radius=8)
        title = self.font.render("Legend", True, STATUS_C)
        box.blit(title, title.get_rect(midtop=(box.get_width()//2, 8)))
        for i, (k, d) in enumerate(items):
            y = 36 + i*line_h
            box.blit(self.font.render(k, True, (255, 220, 120)), (20, y))
            box.blit(self.font.render(d, True, STATUS_C), (40 + key_w, y))
        self.scr.blit(box, box.get_rect(center=self.scr.get_rect().center))


# ───────── main ─────────
if __name__=="__main__":
    try:
        App().run()
    except KeyboardInterrupt:
        print("\nPoynting Canvas stopped.")
    finally:
        pg.quit()
