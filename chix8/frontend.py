"""pygame keyboard and window collaborators for the cycle driver."""

import numpy as np
import pygame

from chix8.constants import NUM_KEYS, SCREEN_WIDTH, SCREEN_HEIGHT
from chix8.driver import KeypadSnapshot
from chix8.rendering import render_frame

WINDOW_TITLE = "CHIP-8 interpreter"

# Host 4x4 block        CHIP-8 keypad
# 1 2 3 4               1 2 3 C
# Q W E R               4 5 6 D
# A S D F               7 8 9 E
# Z X C V               A 0 B F
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


class PygameKeypad:
    """Translate host key state into keypad snapshots; window close or ESC quits."""

    def poll(self) -> KeypadSnapshot:
        quit_requested = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                quit_requested = True

        host_keys = pygame.key.get_pressed()
        pressed = [False] * NUM_KEYS
        for host_key, chip8_key in KEY_MAP.items():
            if host_keys[host_key]:
                pressed[chip8_key] = True

        return KeypadSnapshot(pressed=tuple(pressed), quit=quit_requested)


class PygameScreen:
    """Window showing the framebuffer, upscaled by ``scale``."""

    def __init__(self, scale: int = 10, color_scheme: str = "white"):
        pygame.init()
        self.scale = scale
        self.color_scheme = color_scheme
        self.surface = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
        pygame.display.set_caption(WINDOW_TITLE)

    def render(self, display):
        frame = render_frame(display, self.scale, self.color_scheme)
        # surfarray expects (width, height, 3)
        pygame.surfarray.blit_array(self.surface, np.transpose(frame, (1, 0, 2)))
        pygame.display.flip()

    def close(self):
        pygame.quit()
