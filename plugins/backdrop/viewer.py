"""
Interactive Pygame Viewer for the Generative Backdrop

Opens a resizable window and drives the Scheduler once per frame. The
pointer follows the mouse and window resizes rebuild the active mode.
The mode's colophon text can be overlaid along the bottom edge.

Controls:
  1-7         Select mode (ocean, fractal, flow, constellation,
              lorenz, voronoi, lissajous)
  TAB         Next mode (SHIFT+TAB: previous)
  SPACE       Pause / Resume
  C           Toggle colophon text
  H           Toggle HUD overlay
  S           Save screenshot
  F           Toggle fullscreen
  Q / ESC     Quit
"""

import os
import time
import numpy as np
import pygame

from .presets import MODE_ORDER
from .scheduler import Scheduler


HUD_BG = (0, 0, 0, 140)
HUD_TEXT = (210, 215, 225)
COLOPHON_TEXT = (150, 165, 185)


def _screenshots_dir():
    return os.path.join(
        os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
        "screenshots"
    )


class Viewer:
    def __init__(self, width=1280, height=720, start_mode="ocean", seed=None):
        self.canvas_w = width
        self.canvas_h = height
        self.windowed_size = (width, height)
        self.running = True
        self.paused = False
        self.show_hud = True
        self.show_colophon = True
        self.fullscreen = False
        self.fps_history = []

        self.scheduler = Scheduler(width, height, mode=start_mode, seed=seed)

    def _frame_surface(self):
        """Current visible frame as a pygame Surface."""
        rgb = self.scheduler.surface.to_rgb()
        return pygame.surfarray.make_surface(rgb.swapaxes(0, 1).copy())

    def _draw_hud(self, screen, fps):
        if not self.show_hud:
            return

        stats = self.scheduler.stats
        line = (f"{stats['label']}  |  Frame: {stats['frame']:,}  |  "
                f"Palette: {stats['palette']}  |  "
                f"{self.canvas_w}x{self.canvas_h}  |  FPS: {fps:.0f}")
        if self.paused:
            line = "[PAUSED]  " + line

        padding = 6
        bg_height = 24
        bg_surface = pygame.Surface((self.canvas_w, bg_height), pygame.SRCALPHA)
        bg_surface.fill(HUD_BG)
        screen.blit(bg_surface, (0, 0))

        text_surface = self.hud_font.render(line, True, HUD_TEXT)
        screen.blit(text_surface, (padding + 4, padding))

    def _draw_colophon(self, screen):
        if not self.show_colophon:
            return
        lines = self.scheduler.label.splitlines()
        line_h = self.colophon_font.get_linesize()
        y = self.canvas_h - line_h * len(lines) - 16
        for text in lines:
            surface = self.colophon_font.render(text, True, COLOPHON_TEXT)
            screen.blit(surface, (16, y))
            y += line_h

    def _switch(self, name):
        if self.scheduler.switch_mode(name):
            print(f"Mode: {name} ({self.scheduler.mode.mode_label})")

    def _save_screenshot(self):
        screenshots_dir = _screenshots_dir()
        os.makedirs(screenshots_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(screenshots_dir, f"bg_{self.scheduler.mode_name}_{timestamp}.png")
        latest_path = os.path.join(screenshots_dir, "latest.png")

        save_surface = self._frame_surface()
        pygame.image.save(save_surface, path)
        pygame.image.save(save_surface, latest_path)
        print(f"Screenshot saved: {path}")

    def _resize(self, width, height):
        self.canvas_w = max(1, width)
        self.canvas_h = max(1, height)
        self.scheduler.resize(self.canvas_w, self.canvas_h)

    def run(self):
        """Main viewer loop."""
        pygame.init()

        screen = pygame.display.set_mode((self.canvas_w, self.canvas_h), pygame.RESIZABLE)
        pygame.display.set_caption("Generative Backdrop")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 13)
        self.colophon_font = pygame.font.SysFont("menlo", 12)

        while self.running:
            frame_start = time.time()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    screen = self._handle_keydown(event, screen)
                elif event.type == pygame.MOUSEMOTION:
                    self.scheduler.set_pointer(*event.pos)
                elif event.type == pygame.VIDEORESIZE and not self.fullscreen:
                    screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                    self.windowed_size = event.size
                    self._resize(*event.size)

            if not self.paused:
                self.scheduler.tick()

            screen.blit(self._frame_surface(), (0, 0))

            # FPS
            frame_time = time.time() - frame_start
            self.fps_history.append(frame_time)
            if len(self.fps_history) > 30:
                self.fps_history.pop(0)
            avg_fps = 1.0 / max(np.mean(self.fps_history), 0.001)

            self._draw_colophon(screen)
            self._draw_hud(screen, avg_fps)

            pygame.display.flip()
            clock.tick(60)

        pygame.quit()

    def _handle_keydown(self, event, screen):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_SPACE:
            self.paused = not self.paused

        elif key == pygame.K_h:
            self.show_hud = not self.show_hud

        elif key == pygame.K_c:
            self.show_colophon = not self.show_colophon

        elif key == pygame.K_TAB:
            offset = -1 if event.mod & pygame.KMOD_SHIFT else 1
            if self.scheduler.cycle_mode(offset):
                print(f"Mode: {self.scheduler.mode_name}")

        elif key == pygame.K_s:
            self._save_screenshot()

        elif key == pygame.K_f:
            self.fullscreen = not self.fullscreen
            if self.fullscreen:
                screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
                info = pygame.display.Info()
                self._resize(info.current_w, info.current_h)
            else:
                screen = pygame.display.set_mode(self.windowed_size, pygame.RESIZABLE)
                self._resize(*self.windowed_size)

        # Mode selection (1-7) in toggle order
        elif pygame.K_1 <= key <= pygame.K_9:
            idx = key - pygame.K_1
            if idx < len(MODE_ORDER):
                self._switch(MODE_ORDER[idx])

        return screen
