import logging
import os

# Python-Logging behalten, Kivy hängt sich nur an
os.environ.setdefault("KIVY_LOG_MODE", "MIXED")

from kivy.app import App
from wordcards.config import load_settings
from wordcards.services.backend import BackendClient
from wordcards.services.session import SessionController
from wordcards.services.tasks import BackgroundRunner
from wordcards.persistence.word_store import WordListStore
from wordcards.models.navigator import CardNavigator

logger = logging.getLogger(__name__)


class WordCardsApp(App):
    title = "Vocabulary Trainer"

    def __init__(self, settings, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings
        self.runner = BackgroundRunner()
        self.backend = BackendClient(settings)
        self.store = WordListStore(self.backend, self.runner)
        self.navigator = CardNavigator(self.store)
        self.session = SessionController(self.backend, self.store, self.runner)
        self.view = None

    def build(self):
        from kivy.core.window import Window
        from wordcards.screens.main import TrainerView
        Window.size = self.settings.window_size
        if not self.settings.is_configured:
            logger.error("SUPABASE_URL / SUPABASE_ANON_KEY are not set; backend calls will fail")
        self.view = TrainerView(self.session, self.store, self.navigator)
        return self.view

    def on_start(self):
        self.session.start()
        self.session.restore_session()

    def on_stop(self):
        # Abo immer freigeben; späte Antworten verwerfen
        try:
            self.session.close()
        finally:
            self.runner.shutdown()
            if self.view is not None:
                self.view.detach()


def main():
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    WordCardsApp(settings).run()


if __name__ == "__main__":
    main()
