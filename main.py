# main.py
import logging
from typing import Optional

try:
    import pyperclip
except ImportError:
    pyperclip = None

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.logging import TextualHandler
from textual.widgets import Footer, Header, Input

from config import Config
from models import Country, FetchError, Mode, NetworkFailed
from pagination import PaginationController
from services import CountryFetchService, DatasetStore
from ui import DetailsPane, LogPane, ResultsDisplay, SearchControls

logger = logging.getLogger(__name__)

class CountryBrowserApp(App):
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("c", "copy_country", "Copy Country"),
        ("r", "reload", "Retry Download"),
    ]
    CSS_PATH = "country_browser.tcss"

    def __init__(self, fetch_service: CountryFetchService, config: Config):
        super().__init__()
        self.fetch_service = fetch_service
        self.config = config
        self.store = DatasetStore()
        self.controller = PaginationController(self.store, page_size=config.PAGE_SIZE)
        self.is_loading = False
        self.selected_country: Optional[Country] = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            with Horizontal(id="app-grid"):
                with Vertical(id="left-pane"):
                    yield SearchControls()
                    yield ResultsDisplay(id="results-table")
                with Vertical(id="right-pane"):
                    yield DetailsPane(id="details-pane")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(Input).focus()
        if not pyperclip:
            self.query_one(LogPane).add_message("[yellow]⚠️ 'pyperclip' not installed.[/yellow]")
        self.request_dataset()

    def request_dataset(self) -> None:
        """Starts the download unless the data is loaded or a download is running."""
        if self.store.is_ready:
            self.query_one(LogPane).add_message("[yellow]⚠️ Countries are already loaded.[/yellow]")
            return
        if self.is_loading:
            logger.info("Dataset request ignored, a download is already in flight")
            return
        self.is_loading = True
        self.query_one(LogPane).add_message("🌍 Downloading countries...")
        self.run_worker(self.perform_fetch(), group="fetch_worker")

    async def perform_fetch(self) -> None:
        try:
            countries, error = await self.fetch_service.fetch()
        finally:
            self.is_loading = False
        if error:
            self.report_fetch_error(error)
            return
        self.store.load(countries)
        self.controller.on_data_ready()
        self.refresh_results()
        self.query_one(LogPane).add_message(f"💿 Loaded {len(self.store)} countries.")

    def report_fetch_error(self, error: FetchError) -> None:
        log = self.query_one(LogPane)
        if isinstance(error, NetworkFailed):
            log.add_message("[red]❌ Could not reach the country service.[/red]")
        else:
            log.add_message("[red]❌ The country service sent data we could not read.[/red]")
        log.add_message(f"[dim]{error}[/dim]")
        log.add_message("Press [b]r[/b] to try again.")

    def refresh_results(self) -> None:
        """Redraws the table from whatever the controller currently shows."""
        self.query_one(ResultsDisplay).update_results(self.controller.visible_rows())
        self.selected_country = None
        self.query_one(DetailsPane).update_details(None)

    def action_reload(self) -> None:
        self.request_dataset()

    def action_copy_country(self) -> None:
        log = self.query_one(LogPane)
        if not pyperclip:
            log.add_message("[red]❌ 'pyperclip' not installed.[/red]")
            return
        if self.selected_country:
            pyperclip.copy(self.selected_country.summary())
            log.add_message(f"📋 Copied '[b]{self.selected_country.name}[/b]'.")
        else:
            log.add_message("[yellow]⚠️ No country selected.[/yellow]")

    # --- Message Handlers ---
    def on_search_controls_query_changed(self, message: SearchControls.QueryChanged) -> None:
        previous_mode = self.controller.mode
        self.controller.on_query_changed(message.query)
        self.refresh_results()
        if self.controller.mode is Mode.SEARCH:
            if not self.controller.visible_count():
                self.query_one(LogPane).add_message(f"🤷 No countries match '{message.query}'.")
        elif previous_mode is Mode.SEARCH:
            self.query_one(LogPane).add_message("📜 Search cleared, browsing from the start.")

    def on_results_display_near_end(self, message: ResultsDisplay.NearEnd) -> None:
        shown = self.controller.visible_count()
        self.controller.on_near_end_of_list(message.index)
        count = self.controller.visible_count()
        if count > shown:
            new_rows = [self.controller.visible_at(i) for i in range(shown, count)]
            self.query_one(ResultsDisplay).append_results(new_rows)
            logger.debug("Showing %d of %d countries", count, len(self.store))

    def on_results_display_country_highlighted(self, message: ResultsDisplay.CountryHighlighted) -> None:
        if message.index is not None and message.index < self.controller.visible_count():
            self.selected_country = self.controller.visible_at(message.index)
        else:
            self.selected_country = None
        self.query_one(DetailsPane).update_details(self.selected_country)


if __name__ == "__main__":
    app_config = Config()
    logging.basicConfig(level=app_config.LOG_LEVEL, handlers=[TextualHandler()])
    fetch_service = CountryFetchService(app_config.DATASET_URL, app_config.REQUEST_TIMEOUT)

    app = CountryBrowserApp(fetch_service, app_config)
    app.run()
