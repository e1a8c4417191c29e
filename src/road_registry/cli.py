"""Interactive console menu for the road registry."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .data import MAX_CITIES, StoreOptions
from .exceptions import (
    ConfigurationError,
    DuplicateCityError,
    DuplicateRoadError,
    InvalidCityNameError,
    NotFoundError,
    OutOfRangeError,
    RoadRegistryError,
    SelfReferenceError,
)
from .store import NetworkStore
from .utils import render_cities, render_dump, render_roads
from .validation import validate_city_count, validate_index

BANNER = (
    "\nWelcome to Rwanda Infrastructure Management System\n"
    "---------------------------------------------------\n"
    "Ministry of Infrastructure\n"
)

MENU = (
    "\nMenu:\n"
    "1. Add new city(ies)\n"
    "2. Add roads between cities\n"
    "3. Add the budget for roads\n"
    "4. Edit city\n"
    "5. Search for a city using its index\n"
    "6. Display cities\n"
    "7. Display roads\n"
    "8. Display recorded data on console\n"
    "9. Exit"
)

EXIT_CHOICE = 9

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _parse_int(text: str) -> int | None:
    try:
        return int(text.strip())
    except ValueError:
        return None


def _parse_float(text: str) -> float | None:
    try:
        return float(text.strip())
    except ValueError:
        return None


class Menu:
    """Prompt-driven front end over a NetworkStore.

    Each action re-prompts until it gets an acceptable value, then makes one
    store call. ``input_fn`` behaves like the builtin ``input`` (raising
    EOFError at end of input), ``output`` like ``print``.
    """

    def __init__(
        self,
        store: NetworkStore,
        input_fn: InputFn = input,
        output: OutputFn = print,
    ):
        self.store = store
        self.input = input_fn
        self.output = output
        self.actions: dict[int, Callable[[], None]] = {
            1: self.add_cities,
            2: self.add_road,
            3: self.add_budget,
            4: self.edit_city,
            5: self.search_city,
            6: self.display_cities,
            7: self.display_roads,
            8: self.display_recorded_data,
        }

    def error(self, message: object) -> None:
        self.output(f"Error: {message}")

    def _report_storage(self) -> None:
        if self.store.last_storage_error is not None:
            self.error(self.store.last_storage_error)

    def _prompt_index(self) -> int:
        count = self.store.city_count
        while True:
            index = _parse_int(self.input("Enter the index of the city: "))
            try:
                validate_index(index, count)
            except OutOfRangeError:
                self.error(f"Invalid index. Enter a number between 1 and {count}.")
                continue
            return index

    def _prompt_existing_city(self, prompt: str) -> str:
        while True:
            name = self.input(prompt)
            if name in self.store:
                return name
            self.error(f"City '{name}' does not exist.")

    def add_cities(self) -> None:
        remaining = self.store.remaining_capacity
        if remaining <= 0:
            self.error(f"The limit of {self.store.options.max_cities} cities is reached.")
            return
        while True:
            count = _parse_int(self.input("Enter the number of cities to add: "))
            try:
                count = validate_city_count(
                    count, self.store.city_count, self.store.options.max_cities
                )
            except OutOfRangeError:
                self.error(f"Enter a number between 1 and {remaining}.")
                continue
            break

        names: list[str] = []
        for _ in range(count):
            position = self.store.city_count + len(names) + 1
            while True:
                name = self.input(f"Enter name for city {position}: ")
                try:
                    self.store.check_new_city_name(name, pending=names)
                except (InvalidCityNameError, DuplicateCityError) as exc:
                    self.error(exc)
                    continue
                names.append(name)
                break

        self.store.add_cities(count, names)
        self.output(f"{count} cities added successfully.")
        self._report_storage()

    def add_road(self) -> None:
        city_a = self._prompt_existing_city("Enter the name of the first city: ")
        while True:
            city_b = self.input("Enter the name of the second city: ")
            try:
                self.store.add_road(city_a, city_b)
            except (SelfReferenceError, NotFoundError, DuplicateRoadError) as exc:
                self.error(exc)
                continue
            break
        self.output(f"Road added between {city_a} and {city_b}.")
        self._report_storage()

    def add_budget(self) -> None:
        city_a = self._prompt_existing_city("Enter the name of the first city: ")
        while True:
            city_b = self.input("Enter the name of the second city: ")
            if city_b not in self.store:
                self.error(f"City '{city_b}' does not exist.")
            elif not self.store.has_road(city_a, city_b):
                self.error(f"No road exists between {city_a} and {city_b}.")
            else:
                break
        while True:
            amount = _parse_float(self.input("Enter the budget for the road: "))
            if amount is None:
                self.error("Enter a number for the budget.")
                continue
            try:
                self.store.set_budget(city_a, city_b, amount)
            except OutOfRangeError:
                self.error("Budget must be between 0 and 1000 billion RWF.")
                continue
            break
        self.output(f"Budget added for the road between {city_a} and {city_b}.")
        self._report_storage()

    def edit_city(self) -> None:
        if self.store.city_count == 0:
            self.output("No cities recorded.")
            return
        index = self._prompt_index()
        while True:
            new_name = self.input("Enter the new name of the city: ")
            try:
                self.store.rename_city(index, new_name)
            except (InvalidCityNameError, DuplicateCityError) as exc:
                self.error(exc)
                continue
            break
        self.output("City edited successfully.")
        self._report_storage()

    def search_city(self) -> None:
        if self.store.city_count == 0:
            self.output("No cities recorded.")
            return
        index = self._prompt_index()
        self.output(f"City at index {index}: {self.store.find_city_by_index(index)}")

    def display_cities(self) -> None:
        self.output(render_cities(self.store.dump()))

    def display_roads(self) -> None:
        self.output(render_roads(self.store.dump()))

    def display_recorded_data(self) -> None:
        self.output(render_dump(self.store.dump()))

    def run(self) -> None:
        """Show the menu and dispatch choices until Exit or end of input."""
        while True:
            self.output(MENU)
            try:
                choice = _parse_int(self.input("Enter your choice: "))
                if choice is None:
                    self.error("Please enter a number between 1 and 9.")
                    continue
                if choice == EXIT_CHOICE:
                    break
                action = self.actions.get(choice)
                if action is None:
                    self.error("Invalid choice. Enter a number between 1 and 9.")
                    continue
                action()
            except EOFError:
                break
            except RoadRegistryError as exc:
                self.error(exc)
        self.output("Exiting...")


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="road-registry",
        description="Record cities, the roads between them and road budgets.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("data"),
        help="Directory holding cities.txt and roads.txt (default: ./data)",
    )
    parser.add_argument(
        "--max-cities",
        type=int,
        default=MAX_CITIES,
        help=f"Maximum number of cities (default: {MAX_CITIES})",
    )
    parser.add_argument(
        "--plot",
        type=Path,
        metavar="PATH",
        help="Write a picture of the road network to PATH and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    try:
        options = StoreOptions(storage_dir=args.data_dir, max_cities=args.max_cities)
    except ConfigurationError as exc:
        parser.error(str(exc))
    store = NetworkStore(options)

    if args.plot is not None:
        from .visualization import visualize_network

        try:
            fig = visualize_network(store.dump())
        except ImportError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        fig.savefig(args.plot)
        print(f"Saved network plot to {args.plot}")
        return 0

    print(BANNER)
    Menu(store).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
