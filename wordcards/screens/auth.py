from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.uix.textinput import TextInput
from kivy.metrics import sp
from wordcards.ui.widgets import RoundedButton as Button


class AuthScreen:
    def build_auth_screen(self):
        root = BoxLayout(orientation='vertical', spacing=10, padding=(60, 50, 60, 20))
        root.add_widget(Label(text="Log in or sign up", font_size=sp(30), size_hint=(1, 0.2), color=self.theme["text"]))

        self.email_input = TextInput(hint_text="Email", text=self.view_state.email, multiline=False,
                                     font_size=24, size_hint=(1, None), height=60)
        self.password_input = TextInput(hint_text="Password", text=self.view_state.password, password=True,
                                        multiline=False, font_size=24, size_hint=(1, None), height=60)
        self.email_input.bind(text=lambda inst, val: setattr(self.view_state, "email", val))
        self.password_input.bind(text=lambda inst, val: setattr(self.view_state, "password", val))
        self.password_input.bind(on_text_validate=self._on_login)
        root.add_widget(self.email_input)
        root.add_widget(self.password_input)

        bar = BoxLayout(size_hint=(1, None), height=70, spacing=20)
        signup_btn = Button(text="Sign up", font_size=24, background_color=self.theme["accent"])
        login_btn = Button(text="Log in", font_size=24, background_color=self.theme["success"])
        signup_btn.bind(on_release=self._on_sign_up)
        login_btn.bind(on_release=self._on_login)
        bar.add_widget(signup_btn)
        bar.add_widget(login_btn)
        root.add_widget(bar)
        root.add_widget(BoxLayout())
        self.add_widget(root)

    def _credentials(self):
        return self.view_state.email.strip(), self.view_state.password

    def _on_sign_up(self, *_):
        email, password = self._credentials()
        self.session.sign_up(email, password)

    def _on_login(self, *_):
        email, password = self._credentials()
        self.session.login(email, password)
