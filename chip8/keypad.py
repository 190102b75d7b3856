from chip8.config import KEY_LAYOUT
from chip8.errors import NoKeySourceError


class Keypad:
    """
    state of the 16 hex keys plus the layout used to translate host key identifiers

    the only blocking operation of the machine lives here: read() polls the attached
    key source until it reports an identifier that belongs to the layout
    a key source is any object exposing poll_for_key() -> identifier or None
    """
    def __init__(self, source=None, layout=KEY_LAYOUT):
        self.source = source
        self.mappings = {key: code for code, key in enumerate(layout)}
        self.pressed = [False] * 16

    def map_key(self, identifier):
        """hex code of a host key identifier, None if it's not part of the layout"""
        return self.mappings.get(identifier)

    def is_pressed(self, code):
        return self.pressed[code & 0xF]

    def set_state(self, code, value):
        self.pressed[code & 0xF] = value

    def press(self, identifier):
        code = self.map_key(identifier)
        if code is not None:
            self.set_state(code, True)
        return code

    def release(self, identifier):
        code = self.map_key(identifier)
        if code is not None:
            self.set_state(code, False)
        return code

    def read(self):
        """block until a mapped key event arrives and return its hex code"""
        if self.source is None:
            raise NoKeySourceError("Waiting for a key press but no key source is attached")
        while True:
            code = self.map_key(self.source.poll_for_key())
            if code is not None:
                return code

    def __repr__(self):
        return "".join(format(code, "X") if p else "." for code, p in enumerate(self.pressed))
