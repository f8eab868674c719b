"""Key state updates and release-triggered resolution of FX0A."""

from vipcore.constants import KEY_COUNT
from vipcore.state import EmulatorState


def set_keydown(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Record the level of ``key``; indices outside 0-15 are ignored.

    The instruction set only sees key levels, so a pending FX0A is resolved
    on a down to up transition: if the key was down and is now reported up
    while waiting, the wait ends and the key index lands in the target
    register. Pressing a key never ends the wait.
    """
    if not 0 <= key < KEY_COUNT:
        return state

    pressed = bool(pressed)
    if state.awaiting_input and not pressed and bool(state.keypad[key]):
        state = state.replace(
            awaiting_input=False,
            V=state.V.at[state.awaiter_index].set(key),
        )
    return state.replace(keypad=state.keypad.at[key].set(pressed))


def pressed_keys(state: EmulatorState) -> list[int]:
    return [key for key in range(KEY_COUNT) if bool(state.keypad[key])]
