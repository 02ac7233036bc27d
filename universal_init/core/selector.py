"""Interactive template selection."""
from dataclasses import dataclass
from typing import List, Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from universal_init.models.settings import CUSTOM_TEMPLATE, InitSettings, TemplateChoice

CUSTOM_LABEL = "Custom Template (Enter Manually)"


@dataclass(frozen=True)
class TemplateSelection:
    """The template package chosen for this run."""
    package: str
    label: str

    @property
    def is_custom(self) -> bool:
        return self.label == CUSTOM_LABEL


class TemplateSelector:
    """Asks the operator which template package to use."""

    def __init__(self, settings: InitSettings, console: Console):
        self.settings = settings
        self.console = console

    def menu(self) -> List[tuple]:
        """Numbered menu entries as (number, label, package)."""
        entries = [
            (str(index), choice.label, choice.package)
            for index, choice in enumerate(self.settings.templates, start=1)
        ]
        entries.append((str(len(entries) + 1), CUSTOM_LABEL, CUSTOM_TEMPLATE))
        return entries

    def select(self, preselected: Optional[str] = None) -> TemplateSelection:
        """Return the chosen template, prompting only when nothing was preselected."""
        if preselected is not None and preselected.strip():
            if preselected.strip().lower() == CUSTOM_TEMPLATE:
                return TemplateSelection(package=self.ask_custom(), label=CUSTOM_LABEL)
            return self._resolve(preselected)

        entries = self.menu()
        table = Table(title="Select a template:", show_header=False, box=None)
        table.add_column(style="bold cyan", justify="right")
        table.add_column()
        table.add_column(style="dim")
        for number, label, package in entries:
            table.add_row(number, label, "" if package == CUSTOM_TEMPLATE else package)
        self.console.print(table)

        answer = Prompt.ask(
            "Template",
            choices=[number for number, _, _ in entries],
            default="1",
            console=self.console,
        )
        _, label, package = next(entry for entry in entries if entry[0] == answer)

        if package == CUSTOM_TEMPLATE:
            return TemplateSelection(package=self.ask_custom(), label=CUSTOM_LABEL)
        return TemplateSelection(package=package, label=label)

    def ask_custom(self) -> str:
        """Prompt for a custom template package until a non-empty name is given."""
        while True:
            value = Prompt.ask("Enter the name of the custom template", console=self.console)
            if value and value.strip():
                return value.strip()
            self.console.print("[red]❗Template name cannot be empty[/red]")

    def _resolve(self, value: str) -> TemplateSelection:
        choice: Optional[TemplateChoice] = self.settings.find_template(value)
        if choice is not None:
            return TemplateSelection(package=choice.package, label=choice.label)
        return TemplateSelection(package=value.strip(), label=CUSTOM_LABEL)
