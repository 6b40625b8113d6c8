"""
Single-line text field used by the console prompt and the rename popup.
"""

CHAR_LIMIT = 256


class TextInput:
    """Editable value with a cursor; keys arrive as normalized names."""

    def __init__(self, value='', placeholder='', char_limit=CHAR_LIMIT):
        self.placeholder = placeholder
        self.char_limit = char_limit
        self.value = value[:char_limit]
        self.cursor_pos = len(self.value)

    def set_value(self, value):
        self.value = (value or '')[:self.char_limit]
        self.cursor_pos = len(self.value)

    def reset(self):
        self.set_value('')

    def handle_key(self, key):
        """Apply one key; returns True when the key was consumed."""
        if key == 'backspace':
            if self.cursor_pos > 0:
                self.value = self.value[:self.cursor_pos - 1] + self.value[self.cursor_pos:]
                self.cursor_pos -= 1
        elif key == 'delete':
            if self.cursor_pos < len(self.value):
                self.value = self.value[:self.cursor_pos] + self.value[self.cursor_pos + 1:]
        elif key == 'left':
            if self.cursor_pos > 0:
                self.cursor_pos -= 1
        elif key == 'right':
            if self.cursor_pos < len(self.value):
                self.cursor_pos += 1
        elif key == 'home':
            self.cursor_pos = 0
        elif key == 'end':
            self.cursor_pos = len(self.value)
        elif len(key) == 1 and key.isprintable():
            if len(self.value) >= self.char_limit:
                return True
            self.value = self.value[:self.cursor_pos] + key + self.value[self.cursor_pos:]
            self.cursor_pos += 1
        else:
            return False
        return True

    def visible(self, width):
        """Return ``(text, cursor_x)`` scrolled so the cursor stays in ``width``."""
        if width <= 0:
            return '', 0
        start = max(0, self.cursor_pos - width + 1)
        return self.value[start:start + width], self.cursor_pos - start
