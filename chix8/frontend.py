"""
Pygame window frontend for the CHIP-8 machine
"""

import numpy as np
import pygame

from chix8.errors import Chip8Error
from chix8.keypad import set_key, release_keys
from chix8.machine import Chip8Machine
from chix8.rendering import create_color_scheme
from chix8.logging import format_registers
from chix8.decode import disassemble
from chix8.emulator import peek
from chix8.state import is_waiting_for_key
from chix8.timers import tick, sound_active

# COSMAC VIP keypad layout on a QWERTY keyboard
#   1 2 3 C      1 2 3 4
#   4 5 6 D  =>  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

TONE_FREQUENCY = 440
SAMPLE_RATE = 44100


def make_beep(frequency: int = TONE_FREQUENCY, sample_rate: int = SAMPLE_RATE) -> pygame.mixer.Sound:
    """Square wave lasting one second, looped while the sound timer runs."""
    t = np.arange(sample_rate) / sample_rate
    wave = np.where(np.sin(2 * np.pi * frequency * t) >= 0, 1, -1) * 8000
    channels = pygame.mixer.get_init()[2]
    samples = np.repeat(wave.astype(np.int16)[:, None], channels, axis=1)
    return pygame.sndarray.make_sound(np.ascontiguousarray(samples))


def draw_overlay_text(surface, text_lines, position, font, bg_color=(0, 0, 0), text_color=(255, 255, 255), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay = pygame.Surface((max_width + 16, len(text_lines) * line_height + 8))
    overlay.set_alpha(alpha)
    overlay.fill(bg_color)
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


def run_window(machine: Chip8Machine, scale: int = 10, show_debug: bool = False):
    """Main emulator loop: one frame of instructions and one timer tick per 1/fps second."""
    logger = machine.logger
    pygame.init()
    screen = pygame.display.set_mode((64 * scale, 32 * scale))
    pygame.display.set_caption(f"Chix8 - {machine.rom_path or 'program'}")
    clock = pygame.time.Clock()
    on_color, off_color = create_color_scheme(machine.color_scheme)

    beep = None
    try:
        pygame.mixer.init(frequency=SAMPLE_RATE, size=-16)
        beep = make_beep()
    except pygame.error as e:
        logger.warning(f"Audio unavailable, running muted: {e}")

    state = machine.reset()
    ipf = machine.instructions_per_frame
    running = True
    paused = False
    beeping = False
    fault = None

    logger.info("Controls: ESC=Quit, P=Pause, F5=Reset, +/-=Speed, F1=Debug")

    while running:
        clock.tick(machine.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                    fault = None
                elif event.key == pygame.K_F1:
                    show_debug = not show_debug
                elif event.key == pygame.K_F5:
                    state = machine.reset()
                    fault = None
                    paused = False
                    logger.info("Reset")
                elif event.key == pygame.K_EQUALS:
                    ipf = min(100, ipf + 3)
                    logger.info(f"Speed: {ipf} instructions per frame")
                elif event.key == pygame.K_MINUS:
                    ipf = max(1, ipf - 3)
                    logger.info(f"Speed: {ipf} instructions per frame")
                elif event.key in KEY_MAP:
                    state = set_key(state, KEY_MAP[event.key], True)
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    state = set_key(state, KEY_MAP[event.key], False)
            elif event.type == pygame.WINDOWFOCUSLOST:
                state = release_keys(state)

        if not paused:
            for _ in range(ipf):
                try:
                    state = machine.step(state)
                except Chip8Error as e:
                    fault = e
                    paused = True
                    break
            else:
                state = tick(state)

        if beep is not None:
            should_beep = sound_active(state) and not paused
            if should_beep and not beeping:
                beep.play(loops=-1)
            elif not should_beep and beeping:
                beep.stop()
            beeping = should_beep

        pixels = np.asarray(state.display)
        screen.fill(off_color)
        for y, x in zip(*np.nonzero(pixels)):
            pygame.draw.rect(screen, on_color, pygame.Rect(int(x) * scale, int(y) * scale, scale, scale))

        if show_debug:
            font = pygame.font.Font(None, 18)
            if is_waiting_for_key(state):
                current = "waiting for key"
            else:
                try:
                    current = disassemble(peek(state), state.config.jump_quirk)
                except Chip8Error as e:
                    current = str(e)
            debug_lines = [
                format_registers(state)[:34],
                f"Next: {current}",
                f"IPF: {ipf}  FPS: {clock.get_fps():.1f}",
            ]
            draw_overlay_text(screen, debug_lines, (5, 5), font, alpha=100)

        if paused:
            font = pygame.font.Font(None, 24)
            message = f"FAULT: {fault}" if fault is not None else "PAUSED - P to resume"
            screen.blit(font.render(message, True, (255, 255, 0)), (10, 32 * scale - 30))

        pygame.display.flip()

    pygame.quit()
