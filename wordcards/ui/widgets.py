from kivy.uix.button import Button
from kivy.uix.behaviors import ButtonBehavior
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.properties import NumericProperty, ListProperty, StringProperty, BooleanProperty
from kivy.graphics import Color, RoundedRectangle
from kivy.metrics import sp
from kivy.utils import escape_markup

LIGHT_GREEN = (0.56, 0.93, 0.56, 1)


class RoundedButton(Button):
    corner_radius = NumericProperty(12)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        fill = tuple(self.background_color)
        # Standard-Hintergrund abschalten, wir zeichnen selbst
        self.background_normal = ""
        self.background_down = ""
        self.background_color = (0, 0, 0, 0)
        with self.canvas.before:
            self._fill_instr = Color(*fill)
            self._rect = RoundedRectangle(pos=self.pos, size=self.size, radius=[self.corner_radius])
        self._fill = fill
        self.bind(pos=self._update_canvas, size=self._update_canvas,
                  state=self._update_canvas, disabled=self._update_canvas)

    def on_corner_radius(self, *_):
        if hasattr(self, "_rect"):
            self._rect.radius = [self.corner_radius]

    def _update_canvas(self, *_):
        self._rect.pos = self.pos
        self._rect.size = self.size
        r, g, b, a = self._fill
        if self.state == "down":
            r, g, b = r * 0.8, g * 0.8, b * 0.8
        if self.disabled:
            a = a * 0.4
        self._fill_instr.rgba = (r, g, b, a)


class CardFace(ButtonBehavior, BoxLayout):
    """Tappable flash card: the word, and the meaning once revealed."""

    word = StringProperty("")
    meaning = StringProperty("")
    revealed = BooleanProperty(False)
    bg_color = ListProperty(list(LIGHT_GREEN))
    corner_radius = NumericProperty(15)

    def __init__(self, **kwargs):
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("padding", 20)
        super().__init__(**kwargs)
        with self.canvas.before:
            self._bg_instr = Color(*self.bg_color)
            self._bg_rect = RoundedRectangle(pos=self.pos, size=self.size, radius=[self.corner_radius])
        self.word_label = Label(font_size=sp(24), color=(0.05, 0.1, 0.05, 1), markup=True)
        self.meaning_label = Label(font_size=sp(20), color=(0.05, 0.1, 0.05, 1), markup=True)
        self.add_widget(self.word_label)
        self.add_widget(self.meaning_label)
        self.bind(pos=self._update_bg, size=self._update_bg, bg_color=self._update_bg,
                  word=self._sync_text, meaning=self._sync_text, revealed=self._sync_text)
        self._sync_text()

    def _update_bg(self, *_):
        self._bg_instr.rgba = self.bg_color
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size
        self._bg_rect.radius = [self.corner_radius]

    def _sync_text(self, *_):
        self.word_label.text = f"[b]Word:[/b] {escape_markup(self.word)}" if self.word else ""
        if self.revealed and self.meaning:
            self.meaning_label.text = f"[b]Meaning:[/b] {escape_markup(self.meaning)}"
        else:
            self.meaning_label.text = ""
