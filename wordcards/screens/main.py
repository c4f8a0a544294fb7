import logging
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.graphics import Color, Rectangle
from kivy.clock import Clock
from kivy.metrics import sp
from wordcards.models.state import ViewState
from .landing import LandingScreen
from .auth import AuthScreen
from .cards import CardScreen


class StatusLogHandler(logging.Handler):
    """Mirrors error log records into the view's status line."""

    def __init__(self, view):
        super().__init__(level=logging.ERROR)
        self.view = view

    def emit(self, record):
        try:
            msg = record.getMessage()
        except Exception:
            self.handleError(record)
            return
        Clock.schedule_once(lambda dt: self.view.set_status(msg), 0)


class TrainerView(LandingScreen, AuthScreen, CardScreen, BoxLayout):
    title_text = "Vocabulary Trainer"

    def __init__(self, session, store, navigator, **kwargs):
        super().__init__(**kwargs)
        self.orientation = 'vertical'
        self.theme = {
            "bg": (0.07, 0.08, 0.10, 1),
            "text": (0.95, 0.98, 1, 1),
            "muted": (0.78, 0.82, 0.88, 1),
            "primary": (0.20, 0.52, 0.90, 1),
            "success": (0.25, 0.65, 0.38, 1),
            "danger": (0.85, 0.32, 0.35, 1),
            "accent": (0.55, 0.32, 0.75, 1),
            "closeButton": (0.5, 0.5, 0.5, 1),
        }
        self.session = session
        self.store = store
        self.navigator = navigator
        self.view_state = ViewState()
        self._screen = None
        self._render_scheduled = False

        with self.canvas.before:
            Color(*self.theme["bg"])
            self.rect = Rectangle(size=self.size, pos=self.pos)
        self.bind(size=self._update_rect, pos=self._update_rect)

        self.content = BoxLayout(orientation='vertical')
        self.status_label = Label(text="", font_size=sp(18), size_hint=(1, None), height=40,
                                  color=self.theme["danger"])
        self.status_label.bind(on_touch_down=self._clear_status_on_touch)
        # Bildschirme bauen in self.content
        super().add_widget(self.content)
        super().add_widget(self.status_label)

        for unit in (session, store, navigator):
            unit.add_listener(self._on_state_changed)
        self.status_handler = StatusLogHandler(self)
        logging.getLogger("wordcards").addHandler(self.status_handler)
        self.render()

    def add_widget(self, widget, *args, **kwargs):
        # Mixins fügen ihre Bildschirme über add_widget ein
        return self.content.add_widget(widget, *args, **kwargs)

    def detach(self):
        for unit in (self.session, self.store, self.navigator):
            unit.remove_listener(self._on_state_changed)
        logging.getLogger("wordcards").removeHandler(self.status_handler)

    def _update_rect(self, instance, value):
        self.rect.pos = instance.pos
        self.rect.size = instance.size

    # ---- Rendering ----
    def _on_state_changed(self, *_):
        self.schedule_render()

    def schedule_render(self):
        if self._render_scheduled:
            return
        self._render_scheduled = True
        Clock.schedule_once(self._run_render, 0)

    def _run_render(self, dt):
        self._render_scheduled = False
        self.render()

    def render(self):
        screen = self.view_state.screen(self.session.identity)
        if screen != self._screen:
            self.content.clear_widgets()
            if screen == "landing":
                self.build_landing_screen()
            elif screen == "auth":
                self.build_auth_screen()
            else:
                self.build_card_screen()
            self._screen = screen
        if screen == "cards":
            self.refresh_card_screen()
        self.status_label.text = self.view_state.status or ""

    def set_status(self, message):
        self.view_state.status = message
        self.status_label.text = message or ""

    def _clear_status_on_touch(self, label, touch):
        if label.collide_point(*touch.pos):
            self.set_status(None)
        return False
