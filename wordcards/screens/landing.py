from kivy.uix.anchorlayout import AnchorLayout
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.metrics import sp
from wordcards.ui.widgets import RoundedButton as Button


class LandingScreen:
    def build_landing_screen(self):
        root = BoxLayout(orientation='vertical', spacing=20, padding=(20, 50, 20, 20))
        root.add_widget(Label(text=self.title_text, font_size=sp(40), size_hint=(1, 0.3), color=self.theme["text"]))
        anchor = AnchorLayout(anchor_x='center', anchor_y='top', size_hint=(1, 0.7))
        start_btn = Button(text="Log in / Sign up", font_size=24, size_hint=(None, None), size=(320, 70),
                           background_color=self.theme["primary"])
        start_btn.bind(on_release=self._leave_landing)
        anchor.add_widget(start_btn)
        root.add_widget(anchor)
        self.add_widget(root)

    def _leave_landing(self, *_):
        self.view_state.show_landing = False
        self.schedule_render()
