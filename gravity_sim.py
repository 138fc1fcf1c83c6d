#!/usr/bin/env python3
"""
Gravity Sim application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Both talk to one SimulationController, which owns the bodies and guards them with a
  re-entrant lock.
- The viewport ticks the simulation once per frame (`speed` engine steps per tick) and
  draws trails, bodies and the centre of mass. The control panel loads presets, adds and
  removes bodies, edits colours and trail thickness, and controls the animation.

Running
1) Install: `pip install -e .`
2) Run: `gravity-sim` (or `python gravity_sim.py`)

Two windows will open: the viewport (Pygame) and the controls (Dear PyGui). Closing either
shuts the application down.
"""

import logging
import math
import threading
import time
from typing import Optional

import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from gravsim.camera import Camera2D
from gravsim.constants import (
    BACKGROUND_COLOR,
    CENTER_OF_MASS_COLOR,
    COLOR_OPTIONS,
    DEFAULT_TRAIL_LENGTH,
    GRID_COLOR,
    HUD_TEXT_COLOR,
    MAX_SPEED,
    MAX_TRAIL_LENGTH,
    SAFE_COORD_LIMIT,
    SELECTION_COLOR,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from gravsim.controller import SimulationController
from gravsim.errors import GravSimError
from gravsim.presets import list_presets

logger = logging.getLogger("gravsim")

DEFAULT_PRESET = "Triangle"


def try_float(val) -> Optional[float]:
    try:
        f = float(val)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: ticks the simulation and draws trails, bodies and the centre of mass.
    Handles selection, dragging, camera panning and zoom.
    """
    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = Camera2D(center=(0.0, 0.0))
        self.surface = None
        self.clock = None
        self.dragging_body = False
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.pan_speed_keys = 600  # pixels per second
        self.running = True

    def auto_frame_camera(self):
        """Adjust camera to fit all bodies into view with margin."""
        state = self.sim.frame_state()
        self.camera.frame_points(b.position for b in state.bodies)

    def run(self):
        pygame.init()
        pygame.display.set_caption("Gravity Sim - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.auto_frame_camera()

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events(real_dt)
            self.sim.tick()
            self.draw()

            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.pan_pixels(self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.pan_pixels(-self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_UP]:
            self.camera.pan_pixels(0, self.pan_speed_keys * real_dt)
        if keys[pygame.K_DOWN]:
            self.camera.pan_pixels(0, -self.pan_speed_keys * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                self.sim.toggle()

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:  # left click
                    mouse = pygame.mouse.get_pos()
                    world = self.camera.screen_to_world(mouse)
                    idx = self.sim.select_body_at(world, pick_radius=self.camera.upp * 10)
                    if idx is not None:
                        self.dragging_body = True
                    else:
                        self.dragging_background = True
                        self.drag_start_screen = mouse
                elif event.button in (2, 3):  # middle/right also pan
                    self.dragging_background = True
                    self.drag_start_screen = pygame.mouse.get_pos()

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    self.dragging_body = False
                if event.button in (1, 2, 3):
                    self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION:
                mouse = pygame.mouse.get_pos()
                if self.dragging_body:
                    wx, wy = self.camera.screen_to_world(mouse)
                    try:
                        self.sim.set_selected_position(wx, wy)
                    except GravSimError:
                        self.dragging_body = False
                elif self.dragging_background:
                    dx = mouse[0] - self.drag_start_screen[0]
                    dy = mouse[1] - self.drag_start_screen[1]
                    self.camera.pan_pixels(dx, dy)
                    self.drag_start_screen = mouse

    def draw_axes(self, surf):
        w, h = self.camera.viewport_size
        ox, oy = self.camera.world_to_screen((0.0, 0.0))
        if 0 <= ox <= w:
            pygame.draw.line(surf, GRID_COLOR, (ox, 0), (ox, h), 1)
        if 0 <= oy <= h:
            pygame.draw.line(surf, GRID_COLOR, (0, oy), (w, oy), 1)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)
        self.draw_axes(surf)

        state = self.sim.frame_state()
        with self.sim.lock:
            show_trails = self.sim.show_trails
            show_com = self.sim.show_center_of_mass
        upp = self.camera.upp

        # Trails run from the oldest recorded point up to the current position
        if show_trails:
            for b in state.bodies:
                if not b.trail:
                    continue
                pts = []
                for p in b.trail + (b.position,):
                    sp = _safe_point(self.camera, p)
                    if sp:
                        pts.append(sp)
                if len(pts) > 1:
                    width = max(1, int(round(b.trail_thickness / upp)))
                    pygame.draw.lines(surf, pygame.Color(b.color), False, pts, width)

        for b in state.bodies:
            sp = _safe_point(self.camera, b.position)
            if not sp:
                continue
            vis_r = min(50, max(2, int(b.radius / upp)))
            color = pygame.Color(b.color)
            gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r, color)
            gfxdraw.aacircle(surf, sp[0], sp[1], vis_r, color)
            if b.index == state.selected_index:
                gfxdraw.aacircle(surf, sp[0], sp[1], vis_r + 4, SELECTION_COLOR)

        if show_com and state.center_of_mass is not None:
            sp = _safe_point(self.camera, state.center_of_mass)
            if sp:
                gfxdraw.filled_circle(surf, sp[0], sp[1], 2, CENTER_OF_MASS_COLOR)

        draw_text(surf, "Left-drag: move body | Right/Middle-drag: pan | Wheel: zoom | Arrows: pan | Space: Play/Pause", 10, 10, HUD_TEXT_COLOR)
        draw_text(surf, f"Speed: {state.speed} steps/frame  Frame: {state.frame}  [{'Playing' if state.playing else 'Paused'}]", 10, 30, HUD_TEXT_COLOR)

        pygame.display.flip()


_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("consolas", 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(camera, pos):
    try:
        x, y = camera.world_to_screen(pos)
    except (ValueError, OverflowError):
        return None  # NaN or infinite position
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: presets, add body form, selected body editor, simulation controls.
    """
    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer

        self.mass_id = None
        self.pos_x_id = None
        self.pos_y_id = None
        self.mom_x_id = None
        self.mom_y_id = None
        self.body_list_id = None
        self.color_combo_id = None
        self.thickness_id = None
        self.status_msg_id = None

        self._build_ui()

        dpg.set_frame_callback(1, self._post_setup)
        self._schedule_sync()

    def _post_setup(self):
        self.load_preset(DEFAULT_PRESET)

    def _schedule_sync(self):
        """Reschedule the periodic list refresh (~10Hz) using frame callbacks."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Gravity Sim - Controls', width=480, height=640)

        with dpg.window(label="Controls", width=460, height=620, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                dpg.add_combo(list_presets(), default_value=DEFAULT_PRESET, width=200, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_preset(dpg.get_value("preset_combo")))
                dpg.add_button(label="Auto-fit Camera", callback=self.renderer.auto_frame_camera)

            dpg.add_separator()
            dpg.add_text("Add New Body")
            self.mass_id = dpg.add_input_text(label="Mass (0, 1]", default_value="1.0", width=120)
            with dpg.group(horizontal=True):
                self.pos_x_id = dpg.add_input_text(label="Position X", default_value="0.0", width=100)
                self.pos_y_id = dpg.add_input_text(label="Position Y", default_value="0.0", width=100)
            with dpg.group(horizontal=True):
                self.mom_x_id = dpg.add_input_text(label="Momentum X", default_value="0.0", width=100)
                self.mom_y_id = dpg.add_input_text(label="Momentum Y", default_value="0.0", width=100)
            with dpg.group(horizontal=True):
                dpg.add_button(label="Add Body", callback=self._on_add_body_clicked)
                dpg.add_button(label="Delete Selected", callback=self._on_delete_selected)
            self.status_msg_id = dpg.add_text("")

            dpg.add_separator()
            dpg.add_text("Current Bodies")
            self.body_list_id = dpg.add_listbox(items=[], width=440, num_items=6, callback=self._on_select_body)
            with dpg.group(horizontal=True):
                self.color_combo_id = dpg.add_combo(list(COLOR_OPTIONS), label="Color", width=120)
                self.thickness_id = dpg.add_input_text(label="Trail px", default_value="2", width=60)
                dpg.add_button(label="Apply Style", callback=self._apply_selected_style)

            dpg.add_separator()
            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_checkbox(label="Trails", default_value=True, callback=self._toggle_trails)
                dpg.add_checkbox(label="Center of mass", default_value=True, callback=self._toggle_center_of_mass)
            dpg.add_slider_int(label="Steps per frame", min_value=0, max_value=MAX_SPEED, default_value=self.sim.speed,
                               width=250, callback=lambda s, a, u: self._set_speed(a))
            dpg.add_input_int(label="Trail length", default_value=DEFAULT_TRAIL_LENGTH, min_value=0,
                              max_value=MAX_TRAIL_LENGTH, width=120, callback=lambda s, a, u: self._set_trail_length(a))

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _on_add_body_clicked(self):
        values = [try_float(dpg.get_value(i)) for i in (self.mass_id, self.pos_x_id, self.pos_y_id, self.mom_x_id, self.mom_y_id)]
        if None in values:
            self._set_error("Invalid numeric input.")
            return
        mass, x, y, mx, my = values
        try:
            self.sim.add_body(mass, x, y, mx, my)
        except GravSimError as e:
            self._set_error(str(e))
            return
        self._refresh_body_list()
        self._set_status(f"Added body at ({x:g}, {y:g}).")

    def _on_delete_selected(self):
        if self.sim.delete_selected() is None:
            self._set_error("No body selected.")
            return
        self._refresh_body_list()
        self._set_status("Deleted selected body.")

    def _body_labels(self):
        return self.sim.body_labels()

    def _refresh_body_list(self):
        labels, sel = self._body_labels()
        dpg.configure_item(self.body_list_id, items=labels)
        if labels and sel is not None:
            dpg.set_value(self.body_list_id, labels[sel])
        style = self.sim.get_selected_style()
        if style is not None:
            dpg.set_value(self.color_combo_id, style.color)
            dpg.set_value(self.thickness_id, f"{style.trail_thickness:g}")

    def _on_select_body(self, sender, app_data, user_data):
        labels, _ = self._body_labels()
        if app_data in labels:
            with self.sim.lock:
                self.sim.selected_index = labels.index(app_data)
        self._refresh_body_list()

    def _apply_selected_style(self):
        thickness = try_float(dpg.get_value(self.thickness_id))
        if thickness is None:
            self._set_error("Invalid trail thickness.")
            return
        color = dpg.get_value(self.color_combo_id)
        try:
            if color in COLOR_OPTIONS:
                self.sim.set_selected_color(COLOR_OPTIONS.index(color))
            self.sim.set_selected_trail_thickness(thickness)
        except GravSimError as e:
            self._set_error(str(e))
            return
        self._set_status("Applied style to selected body.")

    def _toggle_play(self):
        playing = self.sim.toggle()
        self._set_status(f"Simulation {'Playing' if playing else 'Paused'}.")

    def _step_once(self):
        self.sim.step_once()
        self._set_status("Stepped once.")

    def _toggle_trails(self, sender, value, user_data=None):
        with self.sim.lock:
            self.sim.show_trails = bool(value)
        if not value:
            self.sim.clear_trails()
        self._set_status(f"Trails {'ON' if value else 'OFF'}.")

    def _toggle_center_of_mass(self, sender, value, user_data=None):
        with self.sim.lock:
            self.sim.show_center_of_mass = bool(value)

    def _set_speed(self, value):
        try:
            self.sim.set_speed(int(value))
        except GravSimError as e:
            self._set_error(str(e))

    def _set_trail_length(self, value):
        try:
            self.sim.set_trail_length(int(value))
        except GravSimError as e:
            self._set_error(str(e))
            return
        self._set_status(f"Trail length set to {int(value)}.")

    def load_preset(self, name: str):
        try:
            count = self.sim.load_preset(name)
        except GravSimError as e:
            self._set_error(str(e))
            return
        self._refresh_body_list()
        self._set_status(f"Loaded preset: {name} ({count} bodies)")
        self.renderer.auto_frame_camera()

    def _sync_ui_with_sim(self):
        labels, sel = self._body_labels()
        dpg.configure_item(self.body_list_id, items=labels)
        if labels and sel is not None:
            dpg.set_value(self.body_list_id, labels[sel])
        self._schedule_sync()


# ============================================================
# Application Entry
# ============================================================

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    sim = SimulationController()
    renderer = PygameRenderer(sim)
    renderer.start()

    ui = UI(sim, renderer)

    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()
        sim.collection.log_state(logging.INFO)


if __name__ == "__main__":
    main()
