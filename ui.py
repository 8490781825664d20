# ui.py
from typing import Iterable, Optional

from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import DataTable, Input, Label, Markdown, RichLog, Static

from models import Country

SEARCH_PLACEHOLDER = "Search by name, code, region or capital"

class SearchControls(Static):
    """Widget for the search input. Every edit is reported, including clearing it."""
    class QueryChanged(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Label("Filter countries:")
        yield Input(placeholder=SEARCH_PLACEHOLDER, id="search-input")

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.QueryChanged(event.value))


class DetailsPane(Static):
    """Widget to display details of the highlighted country."""
    def on_mount(self) -> None:
        self.update_details(None)

    def update_details(self, country: Optional[Country]) -> None:
        if country:
            content = f"## {country.name}\n\n- **Region**: {country.region}\n- **Code**: {country.code}\n- **Capital**: {country.capital}"
        else:
            content = "## Details\n\n*Highlight a country to see its details.*"
        self.query_one(Markdown).update(content)

    def compose(self) -> ComposeResult:
        yield Markdown()


class ResultsDisplay(DataTable):
    """Widget for the country list. Rows are keyed by their visible index."""
    class NearEnd(Message):
        """Sent when the cursor reaches the last row currently shown."""
        def __init__(self, index: int) -> None:
            self.index = index
            super().__init__()

    class CountryHighlighted(Message):
        def __init__(self, index: Optional[int]) -> None:
            self.index = index
            super().__init__()

    def on_mount(self) -> None:
        self.add_columns("Name", "Region", "Code", "Capital")
        self.cursor_type = "row"

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        event.stop()
        index = event.cursor_row
        self.post_message(self.CountryHighlighted(index if index < self.row_count else None))
        if self.row_count and index == self.row_count - 1:
            self.post_message(self.NearEnd(index))

    def update_results(self, countries: Iterable[Country]) -> None:
        self.clear()
        self.append_results(countries)

    def append_results(self, countries: Iterable[Country]) -> None:
        start = self.row_count
        for offset, c in enumerate(countries):
            self.add_row(c.name, c.region, c.code, c.capital, key=str(start + offset))


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)
