# main.py
import argparse
import pygame
import numpy as np
from PIL import Image
from camera.controls import CameraCommand, apply_command
from renderer.raytracer import BACKENDS, Renderer
from scenes import create_camera, create_world

WINDOW_WIDTH = 720
WINDOW_HEIGHT = 480

QUALITY_LEVELS = {
    "preview": {"scale": 0.5},
    "full": {"scale": 1.0},
}

KEY_BINDINGS = {
    pygame.K_LEFT: CameraCommand.YAW_LEFT,
    pygame.K_RIGHT: CameraCommand.YAW_RIGHT,
    pygame.K_UP: CameraCommand.PITCH_UP,
    pygame.K_DOWN: CameraCommand.PITCH_DOWN,
    pygame.K_w: CameraCommand.MOVE_FORWARD,
    pygame.K_s: CameraCommand.MOVE_BACKWARD,
    pygame.K_a: CameraCommand.MOVE_LEFT,
    pygame.K_d: CameraCommand.MOVE_RIGHT,
    pygame.K_e: CameraCommand.MOVE_UP,
    pygame.K_q: CameraCommand.MOVE_DOWN,
}

def save_frame(frame: np.ndarray, path: str) -> None:
    """Writes a (width, height, 3) frame to disk as an image."""
    # Pillow expects rows first.
    Image.fromarray(np.ascontiguousarray(frame.transpose(1, 0, 2))).save(path)

def render_snapshot(path: str, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT,
                    backend: str = "numba", debug: bool = False) -> np.ndarray:
    """Renders the demo scene once without opening a window and saves it."""
    world = create_world()
    camera = create_camera()
    renderer = Renderer(width, height, backend=backend, debug_mode=debug)
    try:
        frame = renderer.render_frame(camera, world)
        save_frame(frame, path)
        print(f"Saved {width}x{height} snapshot to {path}")
        return frame.copy()
    finally:
        renderer.cleanup()

class Application:
    def __init__(self, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT,
                 backend: str = "numba", scale: float = 1.0, debug: bool = False):
        pygame.init()

        self.window_width = width
        self.window_height = height
        self.backend = backend
        self.debug = debug
        self.render_scale = scale
        self.current_quality = None
        self.update_render_resolution()

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Whitted Ray Tracer")

        self.camera = create_camera()
        self.world = create_world()
        self.renderer = Renderer(self.render_width, self.render_height,
                                 backend=self.backend, debug_mode=self.debug)
        self.frame = None
        self.snapshot_count = 0

    def update_render_resolution(self):
        """Update the render resolution based on the current render scale."""
        self.render_width = max(1, int(self.window_width * self.render_scale))
        self.render_height = max(1, int(self.window_height * self.render_scale))

    def apply_quality_settings(self, quality: str):
        """Switch render scale; the renderer is rebuilt at the new resolution."""
        self.current_quality = quality
        self.render_scale = QUALITY_LEVELS[quality]["scale"]
        self.update_render_resolution()

        self.renderer.cleanup()
        self.renderer = Renderer(self.render_width, self.render_height,
                                 backend=self.backend, debug_mode=self.debug)
        print(f"Quality changed to: {quality} ({self.render_width}x{self.render_height})")

    def draw(self):
        """Render one frame and put it on screen."""
        self.frame = self.renderer.render_frame(self.camera, self.world)
        self.present()
        pygame.display.set_caption(
            f"Whitted Ray Tracer | {self.renderer.last_render_time * 1000:.0f} ms")

    def present(self):
        """Blit the last rendered frame without tracing again."""
        frame_surface = pygame.surfarray.make_surface(self.frame)
        if self.render_width != self.window_width or self.render_height != self.window_height:
            frame_surface = pygame.transform.scale(frame_surface, (self.window_width, self.window_height))

        self.screen.blit(frame_surface, (0, 0))
        pygame.display.flip()

    def save_snapshot(self):
        if self.frame is None:
            return
        self.snapshot_count += 1
        path = f"snapshot_{self.snapshot_count:03d}.png"
        save_frame(self.frame, path)
        print(f"Saved snapshot to {path}")

    def handle_key(self, key) -> bool:
        """
        Process one key press. Returns True when the frame must be redrawn.
        """
        command = KEY_BINDINGS.get(key)
        if command is not None:
            apply_command(self.camera, command)
            if self.debug:
                print(f"{command.value}: {self.camera}")
            return True
        if key == pygame.K_p:
            self.save_snapshot()
        elif key == pygame.K_1:
            self.apply_quality_settings("preview")
            return True
        elif key == pygame.K_2:
            self.apply_quality_settings("full")
            return True
        return False

    def handle_event(self, event) -> bool:
        """Process one pygame event. Returns False when the app should quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if self.handle_key(event.key):
                self.draw()
        elif event.type == pygame.VIDEOEXPOSE and self.frame is not None:
            self.present()
        return True

    def cleanup(self):
        self.renderer.cleanup()

    def run(self):
        try:
            print("\n=== Initializing Renderer ===")
            print(f"Window: {self.window_width}x{self.window_height}")
            print(f"Render resolution: {self.render_width}x{self.render_height}")
            print(f"Backend: {self.backend}")

            self.draw()

            running = True
            while running:
                # Block until input; every command triggers exactly one render.
                running = self.handle_event(pygame.event.wait())
        finally:
            print("Cleaning up...")
            self.cleanup()
            pygame.quit()

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive Whitted ray tracer")
    parser.add_argument("--width", type=int, default=WINDOW_WIDTH, help="Window width in pixels")
    parser.add_argument("--height", type=int, default=WINDOW_HEIGHT, help="Window height in pixels")
    parser.add_argument("--backend", choices=BACKENDS, default="numba",
                        help="Compiled numba kernel or the pure Python tracer")
    parser.add_argument("--scale", type=float, default=1.0,
                        help="Render resolution relative to the window, upscaled on display")
    parser.add_argument("--snapshot", metavar="PATH",
                        help="Render a single frame to PATH as PNG and exit without a window")
    parser.add_argument("--debug", action="store_true", help="Print per-frame timings")
    return parser

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    if not 0 < args.scale <= 1:
        parser.error("--scale must be in (0, 1]")

    if args.snapshot:
        render_snapshot(args.snapshot, args.width, args.height, args.backend, args.debug)
        return

    app = Application(args.width, args.height, args.backend, args.scale, args.debug)
    try:
        app.run()
    except Exception as e:
        print(f"Error during execution: {e}")
        import traceback
        traceback.print_exc()
        raise

if __name__ == "__main__":
    main()
