"""Text-based UI elements and the drawing surface they render onto."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Callable, Generic, Iterator, TypeVar, Union

from mwmud.client.events import Key, KeyInput

TEXT_FONT_DEFAULT = "Arial"
TEXT_COLOR_DEFAULT = "white"
TEXT_COLOR_HIGHLIGHTED = "yellow"
INPUT_RECT_COLOR_DEFAULT = "darkslategray"

# Layout metrics of the default font, relative to the font size.
CHAR_WIDTH_RATIO = 0.5
LINE_HEIGHT_RATIO = 1.15


class TextAlign(Enum):
    """Horizontal alignment of text within its bounds."""

    LEADING = "leading"
    TRAILING = "trailing"
    CENTER = "center"
    JUSTIFIED = "justified"


class ParagraphAlign(Enum):
    """Vertical alignment of text within its bounds."""

    NEAR = "near"
    FAR = "far"
    CENTER = "center"


class FontWeight(IntEnum):
    LIGHT = 300
    NORMAL = 400
    BOLD = 700


@dataclass
class Rect:
    """An axis-aligned rectangle in screen coordinates."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class TextStyle:
    """How a run of text is laid out."""

    size: float
    weight: FontWeight = FontWeight.NORMAL
    align_horizontal: TextAlign = TextAlign.LEADING
    align_vertical: ParagraphAlign = ParagraphAlign.NEAR
    font: str = TEXT_FONT_DEFAULT


@dataclass(frozen=True)
class FillOp:
    rect: Rect
    color: str


@dataclass(frozen=True)
class TextOp:
    text: str
    rect: Rect
    color: str
    style: TextStyle


DrawOp = Union[FillOp, TextOp]


class Canvas:
    """A drawing surface that records what is drawn, for a renderer to replay."""

    def __init__(self) -> None:
        self.operations: list[DrawOp] = []

    def fill_rect(self, rect: Rect, color: str) -> None:
        """Fill a rectangle with a colour."""
        self.operations.append(FillOp(replace(rect), color))

    def draw_text(self, text: str, rect: Rect, color: str, style: TextStyle) -> None:
        """Draw text inside a rectangle."""
        self.operations.append(TextOp(text, replace(rect), color, style))

    def clear(self) -> None:
        """Forget everything drawn so far."""
        self.operations.clear()


def text_height(text: str, text_size: float, width: float) -> float:
    """Return the height of text wrapped to a width; empty text is one line."""
    line_height = text_size * LINE_HEIGHT_RATIO
    char_width = text_size * CHAR_WIDTH_RATIO
    per_line = max(1, int(width // char_width)) if char_width > 0 else 1
    lines = sum(max(1, math.ceil(len(paragraph) / per_line)) for paragraph in text.split("\n"))
    return lines * line_height


def _printable(key: KeyInput) -> bool:
    return isinstance(key, str) and len(key) == 1 and " " <= key <= "~"


class UIText:
    """A piece of text drawn inside its bounds."""

    def __init__(
        self,
        text: str = "",
        text_size: float = 12.0,
        align_horizontal: TextAlign = TextAlign.LEADING,
        align_vertical: ParagraphAlign = ParagraphAlign.NEAR,
        font_weight: FontWeight = FontWeight.NORMAL,
        bounds: Rect | None = None,
    ) -> None:
        self.text = text
        self.text_size = text_size
        self.align_horizontal = align_horizontal
        self.align_vertical = align_vertical
        self.font_weight = font_weight
        self.bounds = bounds if bounds is not None else Rect()
        self.focused = False

    @property
    def style(self) -> TextStyle:
        return TextStyle(
            self.text_size,
            self.font_weight,
            self.align_horizontal,
            self.align_vertical,
        )

    def _color(self) -> str:
        return TEXT_COLOR_DEFAULT

    def text_height(self) -> float:
        """Return the height of the text wrapped to the width of the bounds."""
        return text_height(self.text, self.text_size, self.bounds.width)

    def draw(self, canvas: Canvas) -> None:
        """Draw the text onto a canvas."""
        canvas.draw_text(self.text, self.bounds, self._color(), self.style)


class UIMenuOption(UIText):
    """Selectable text that is highlighted while focused."""

    def __init__(
        self,
        text: str = "",
        text_size: float = 12.0,
        align_horizontal: TextAlign = TextAlign.LEADING,
        align_vertical: ParagraphAlign = ParagraphAlign.NEAR,
        font_weight: FontWeight = FontWeight.NORMAL,
        bounds: Rect | None = None,
        on_select: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(text, text_size, align_horizontal, align_vertical, font_weight, bounds)
        self.on_select = on_select

    def _color(self) -> str:
        return TEXT_COLOR_HIGHLIGHTED if self.focused else TEXT_COLOR_DEFAULT

    def select(self) -> None:
        """Run the option's callback."""
        if self.on_select is None:
            raise RuntimeError(f"menu option {self.text!r} has no callback")
        self.on_select()

    def draw(self, canvas: Canvas) -> None:
        """Draw the option, highlighted while focused."""
        canvas.draw_text(self.text, self.bounds, self._color(), self.style)


class UITextInput(UIText):
    """A single-line field that collects typed characters."""

    HEIGHT_SAMPLE = "Height Calc"

    def __init__(
        self,
        text_size: float = 12.0,
        font_weight: FontWeight = FontWeight.NORMAL,
        left: float = 0.0,
        top: float = 0.0,
        right: float = 0.0,
    ) -> None:
        height = text_height(self.HEIGHT_SAMPLE, text_size, right - left)
        super().__init__(
            "",
            text_size,
            TextAlign.LEADING,
            ParagraphAlign.CENTER,
            font_weight,
            Rect(left, top, right, top + height),
        )

    def char_in(self, key: KeyInput) -> None:
        """Add a printable character, or remove the last one on backspace."""
        if _printable(key):
            self.text += key
        elif key == Key.BACK:
            self.text = self.text[:-1]

    def draw(self, canvas: Canvas) -> None:
        """Draw the field's rectangle while focused, then its text."""
        if self.focused:
            canvas.fill_rect(self.bounds, INPUT_RECT_COLOR_DEFAULT)
        if self.text:
            super().draw(canvas)


class UILabeledTextInput:
    """A text input with a label to its left."""

    def __init__(
        self,
        label_text: str,
        text_size: float = 12.0,
        label_align: ParagraphAlign = ParagraphAlign.NEAR,
        font_weight: FontWeight = FontWeight.NORMAL,
        left: float = 0.0,
        top: float = 0.0,
        label_width: float = 0.0,
        input_width: float = 0.0,
    ) -> None:
        self.label = UIText(label_text, text_size, TextAlign.CENTER, label_align, font_weight)
        self.label.bounds = Rect(
            left, top, left + label_width, top + text_height(label_text, text_size, label_width)
        )
        self.input = UITextInput(
            text_size, font_weight, left + label_width, top, left + label_width + input_width
        )
        self._focused = False

    @property
    def focused(self) -> bool:
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        self._focused = value
        self.label.focused = value
        self.input.focused = value

    @property
    def input_text(self) -> str:
        return self.input.text

    @property
    def bottom(self) -> float:
        return self.input.bounds.bottom

    def char_in(self, key: KeyInput) -> None:
        """Pass a key to the input while focused."""
        if self._focused:
            self.input.char_in(key)

    def draw(self, canvas: Canvas) -> None:
        self.label.draw(canvas)
        self.input.draw(canvas)


E = TypeVar("E", bound=UIText)


class VerticalList(Generic[E]):
    """Text elements stacked top to bottom with a fixed spacing between them."""

    def __init__(
        self,
        text_size: float = 12.0,
        align_horizontal: TextAlign = TextAlign.LEADING,
        align_vertical: ParagraphAlign = ParagraphAlign.NEAR,
        font_weight: FontWeight = FontWeight.NORMAL,
        spacing: float = 0.0,
        left: float = 0.0,
        top: float = 0.0,
        right: float = 0.0,
        element_type: type[E] = UIText,  # type: ignore[assignment]
    ) -> None:
        self.text_size = text_size
        self.align_horizontal = align_horizontal
        self.align_vertical = align_vertical
        self.font_weight = font_weight
        self.spacing = spacing
        self.left = left
        self.top = top
        self.right = right
        self.element_type = element_type
        self._elements: list[E] = []

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[E]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> E:
        return self._elements[index]

    @property
    def elements(self) -> list[E]:
        return list(self._elements)

    @property
    def height(self) -> float:
        """Distance from the list's top to the bottom of its last element."""
        if not self._elements:
            return 0.0
        return self._elements[-1].bounds.bottom - self.top

    def _make(self, text: str) -> E:
        return self.element_type(
            text, self.text_size, self.align_horizontal, self.align_vertical, self.font_weight
        )

    def _layout(self) -> None:
        y = self.top
        width = self.right - self.left
        for element in self._elements:
            height = text_height(element.text, self.text_size, width)
            element.bounds = Rect(self.left, y, self.right, y + height)
            y += height + self.spacing

    def push_back(self, text: str) -> E:
        """Append an element holding the text and return it."""
        element = self._make(text)
        self._elements.append(element)
        self._layout()
        return element

    def push_front(self, text: str) -> E:
        """Insert an element holding the text at the top and return it."""
        element = self._make(text)
        self._elements.insert(0, element)
        self._layout()
        return element

    def pop_front(self) -> E:
        """Remove and return the top element."""
        if not self._elements:
            raise IndexError("pop from an empty list")
        element = self._elements.pop(0)
        self._layout()
        return element

    def clear(self) -> None:
        self._elements.clear()

    def draw(self, canvas: Canvas) -> None:
        for element in self._elements:
            element.draw(canvas)