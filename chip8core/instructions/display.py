"""CHIP-8 display operations."""

from chip8core.state import EmulatorState
from chip8core.decode import Draw
from chip8core.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER
from chip8core.display import draw_sprite
from chip8core.memory import read_bytes


def execute_display(state: EmulatorState, instruction: Draw) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    The origin wraps onto the screen, the sprite itself is clipped. Only rows
    that land on screen are read from memory.
    """
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT

    visible_rows = min(instruction.height, SCREEN_HEIGHT - sprite_y)
    sprite_rows = read_bytes(state.memory, int(state.I), visible_rows)

    display, collided = draw_sprite(state.display, sprite_x, sprite_y, sprite_rows)
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(int(collided))
    )
