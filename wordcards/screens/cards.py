from kivy.uix.boxlayout import BoxLayout
from kivy.uix.label import Label
from kivy.uix.textinput import TextInput
from kivy.metrics import sp
from wordcards.ui.widgets import CardFace, RoundedButton as Button


class CardScreen:
    def build_card_screen(self):
        root = BoxLayout(orientation='vertical', spacing=12, padding=20)
        header = BoxLayout(size_hint=(1, 0.1), spacing=10)
        header.add_widget(Label(text=self.title_text, font_size=sp(32), color=self.theme["text"]))
        logout_btn = Button(text="Log out", font_size=22, size_hint=(None, 1), width=180,
                            background_color=self.theme["closeButton"])
        logout_btn.bind(on_release=lambda *_: self.session.logout())
        header.add_widget(logout_btn)
        root.add_widget(header)

        self.card = CardFace(size_hint=(1, 0.35))
        self.card.bind(on_release=lambda *_: self.navigator.toggle_reveal())
        root.add_widget(self.card)

        # Nächstes Wort / Löschen, nur bei nicht-leerer Liste
        self.card_actions = BoxLayout(size_hint=(1, 0.1), spacing=10)
        self.next_btn = Button(text="Next word", font_size=24, background_color=(0.4, 0.8, 0.4, 1))
        self.delete_btn = Button(text="Delete current word", font_size=24, background_color=self.theme["danger"])
        self.next_btn.bind(on_release=lambda *_: self.navigator.next())
        self.delete_btn.bind(on_release=self._on_delete_current)
        self.card_actions.add_widget(self.next_btn)
        self.card_actions.add_widget(self.delete_btn)
        root.add_widget(self.card_actions)

        self.empty_label = Label(text="", font_size=sp(20), size_hint=(1, 0.05), color=self.theme["muted"])
        root.add_widget(self.empty_label)

        root.add_widget(Label(text="Add a new word", font_size=sp(26), size_hint=(1, 0.08), color=self.theme["text"]))
        add_row = BoxLayout(size_hint=(1, 0.1), spacing=10)
        self.word_input = TextInput(hint_text="Word", text=self.view_state.new_word, multiline=False, font_size=24)
        self.meaning_input = TextInput(hint_text="Meaning", text=self.view_state.new_meaning, multiline=False, font_size=24)
        self.word_input.bind(text=lambda inst, val: setattr(self.view_state, "new_word", val))
        self.meaning_input.bind(text=lambda inst, val: setattr(self.view_state, "new_meaning", val))
        self.meaning_input.bind(on_text_validate=self._on_add_word)
        add_btn = Button(text="Add word", font_size=24, size_hint=(None, 1), width=180,
                         background_color=self.theme["success"])
        add_btn.bind(on_release=self._on_add_word)
        add_row.add_widget(self.word_input)
        add_row.add_widget(self.meaning_input)
        add_row.add_widget(add_btn)
        root.add_widget(add_row)
        root.add_widget(BoxLayout(size_hint=(1, 0.22)))
        self.add_widget(root)

    def refresh_card_screen(self):
        entry = self.navigator.current
        has_cards = entry is not None
        self.card.opacity = 1 if has_cards else 0
        self.card.disabled = not has_cards
        self.card.word = entry.word if has_cards else ""
        self.card.meaning = entry.meaning if has_cards else ""
        self.card.revealed = self.navigator.revealed
        self.card_actions.opacity = 1 if has_cards else 0
        self.next_btn.disabled = not has_cards
        self.delete_btn.disabled = not has_cards
        self.empty_label.text = "" if has_cards else "No words yet."

    def _on_delete_current(self, *_):
        if self.navigator.current is None:
            return
        self.store.delete(self.navigator.cursor)

    def _on_add_word(self, *_):
        word = self.view_state.new_word.strip()
        meaning = self.view_state.new_meaning.strip()
        self.store.add(word, meaning, self.session.identity, on_added=self._clear_add_inputs)

    def _clear_add_inputs(self, _entries):
        self.view_state.clear_new_word()
        if getattr(self, "word_input", None):
            self.word_input.text = ""
            self.meaning_input.text = ""
