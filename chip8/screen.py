from chip8.config import SCREEN_HEIGHT, SCREEN_WIDTH


class Screen:
    """monochrome framebuffer, row-major, a pixel is either ON (True) or OFF (False)"""
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.buffer = [False] * h * w

    def _index(self, x, y):
        if not (0 <= x < self.w and 0 <= y < self.h):
            raise ValueError(f"Pixel ({x}, {y}) is outside of the {self.w}x{self.h} screen")
        return x + y * self.w

    def read_pixel(self, x, y):
        return self.buffer[self._index(x, y)]

    def write_pixel(self, x, y, value):
        self.buffer[self._index(x, y)] = bool(value)

    def flip_pixel(self, x, y):
        """XOR a set sprite bit onto the pixel, return True if the pixel got erased"""
        idx = self._index(x, y)
        erased = self.buffer[idx]
        self.buffer[idx] = not erased
        return erased

    def clear(self):
        self.buffer = [False] * self.h * self.w

    def rows(self):
        """the boolean grid consumed by renderers, one list per row"""
        return [self.buffer[y*self.w:(y+1)*self.w] for y in range(self.h)]

    def __str__(self):
        return "\n".join("".join("*" if p else " " for p in row) for row in self.rows())
