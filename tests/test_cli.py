"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from later.cli import main
from later.data import load_model, save_model
from later.models import DEFAULT_LIST, DateOnly, Entry, ListCollection, Sublist
from later.version import VERSION


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def stored(data_file, sample_lists):
    """Write the sample lists to the document the CLI will load."""
    save_model(sample_lists, data_file)
    return sample_lists


def load(data_file):
    return load_model(ListCollection, data_file)


def titles(sublist):
    return [item.title for item in sublist.items]


class TestShow:
    """Test showing lists."""

    def test_first_run_creates_document(self, runner, data_file):
        """Test that the first run creates a document with the default list."""
        result = runner.invoke(main, [])
        assert result.exit_code == 0, result.output
        assert "Generating new storage file" in result.output
        assert "0) Hello, world!" in result.output
        assert data_file.exists()

    def test_show_default(self, runner, stored):
        """Test rendering the default list with no command."""
        result = runner.invoke(main, [])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "   to-do",
            "0) a",
            "1---> b (" + stored.get(DEFAULT_LIST).items[1].date.describe() + ")",
            "   0) b0",
            "   1) b1",
            "2---> c",
            "   0) c0",
            "3) d",
        ]

    def test_show_named_list(self, runner, stored):
        """Test selecting a list by a leading name."""
        result = runner.invoke(main, ["groceries"])
        assert result.exit_code == 0, result.output
        assert result.output == "   groceries\n0) eggs\n"

    def test_unknown_list(self, runner, stored):
        """Test that an unknown list name is reported."""
        result = runner.invoke(main, ["nope"])
        assert result.exit_code == 1
        assert "List 'nope' not found!" in result.output

    def test_undecodable_document(self, runner, data_file):
        """Test that a document with invalid UTF-8 is reported, not raised."""
        data_file.parent.mkdir(parents=True)
        data_file.write_bytes(b'{"to-do": "\xff\xfe"}')
        result = runner.invoke(main, [])
        assert result.exit_code == 1
        assert "Couldn't decode to-do list file" in result.output

    def test_indent_from_config(self, runner, stored, isolated_env):
        """Test that the configured indent is used for rendering."""
        (isolated_env / "config.yml").write_text("indent: 1\n")
        result = runner.invoke(main, [])
        assert " 0) b0" in result.output.splitlines()

    def test_version(self, runner):
        """Test printing the version."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert VERSION in result.output


class TestAdd:
    """Test adding items."""

    def test_add_named(self, runner, stored, data_file):
        """Test adding an entry by name."""
        result = runner.invoke(main, ["add", "milk"])
        assert result.exit_code == 0, result.output
        assert "4) milk" in result.output
        assert titles(load(data_file).get(DEFAULT_LIST))[-1] == "milk"

    def test_add_name_with_commas(self, runner, stored, data_file):
        """Test that a name containing commas is not read as an index."""
        result = runner.invoke(main, ["add", "milk, eggs"])
        assert result.exit_code == 0, result.output
        assert titles(load(data_file).get(DEFAULT_LIST))[-1] == "milk, eggs"

    def test_add_into_sublist(self, runner, stored, data_file):
        """Test appending into a sublist."""
        result = runner.invoke(main, ["add", "1", "b2"])
        assert result.exit_code == 0, result.output
        assert titles(load(data_file).get(DEFAULT_LIST).items[1]) == ["b0", "b1", "b2"]

    def test_add_promotes_entry(self, runner, stored, data_file):
        """Test that adding under an entry turns it into a sublist."""
        result = runner.invoke(main, ["add", "0", "a0"])
        assert result.exit_code == 0, result.output
        assert "0---> a" in result.output
        promoted = load(data_file).get(DEFAULT_LIST).items[0]
        assert isinstance(promoted, Sublist)
        assert titles(promoted) == ["a0"]

    def test_add_with_date(self, runner, stored, data_file):
        """Test adding an entry with a due date."""
        result = runner.invoke(main, ["add", "rent", "-d", "2030/04/01"])
        assert result.exit_code == 0, result.output
        assert load(data_file).get(DEFAULT_LIST).items[-1].date == DateOnly.model_validate({"value": "2030-04-01"})

    def test_add_bad_date(self, runner, stored, data_file):
        """Test that a malformed date is rejected without saving."""
        result = runner.invoke(main, ["add", "rent", "-d", "04/01/2030"])
        assert result.exit_code == 1
        assert "Error parsing date" in result.output
        assert load(data_file) == stored

    def test_add_prompted(self, runner, stored, data_file):
        """Test adding an entry from prompted details."""
        result = runner.invoke(main, ["add"], input="call bank\n\n\n")
        assert result.exit_code == 0, result.output
        assert titles(load(data_file).get(DEFAULT_LIST))[-1] == "call bank"

    def test_add_prompted_blank_title(self, runner, stored, data_file):
        """Test that a blank prompted title is asked for again."""
        result = runner.invoke(main, ["add"], input="   \ncall bank\n\n\n")
        assert result.exit_code == 0, result.output
        assert "Please give the new item a title." in result.output
        assert titles(load(data_file).get(DEFAULT_LIST))[-1] == "call bank"

    def test_add_date_without_name(self, runner, stored, data_file):
        """Test that a date without a name is a usage error."""
        result = runner.invoke(main, ["add", "-d", "2030/01/01"])
        assert result.exit_code == 2
        assert "--date and --time need a NAME" in result.output
        assert load(data_file) == stored

    def test_add_bad_index(self, runner, stored, data_file):
        """Test that an index past the end is rejected without saving."""
        result = runner.invoke(main, ["add", "9", "x"])
        assert result.exit_code == 1
        assert "too big" in result.output
        assert load(data_file) == stored

    def test_add_to_named_list(self, runner, stored, data_file):
        """Test adding to a named list."""
        result = runner.invoke(main, ["groceries", "add", "bread"])
        assert result.exit_code == 0, result.output
        assert titles(load(data_file).get("groceries")) == ["eggs", "bread"]

    def test_short_flag(self, runner, stored, data_file):
        """Test the short command aliases."""
        result = runner.invoke(main, ["groceries", "-a", "bread"])
        assert result.exit_code == 0, result.output
        assert titles(load(data_file).get("groceries")) == ["eggs", "bread"]

    def test_list_name_option(self, runner, stored, data_file):
        """Test selecting a list with --list-name."""
        result = runner.invoke(main, ["--list-name", "groceries", "add", "bread"])
        assert result.exit_code == 0, result.output
        assert titles(load(data_file).get("groceries")) == ["eggs", "bread"]


class TestRemove:
    """Test removing items."""

    def test_remove_entry_default_yes(self, runner, stored, data_file):
        """Test that removing an entry is confirmed by default."""
        result = runner.invoke(main, ["remove", "0"], input="\n")
        assert result.exit_code == 0, result.output
        assert "Remove entry 'a'? (Y/n)" in result.output
        assert titles(load(data_file).get(DEFAULT_LIST)) == ["b", "c", "d"]

    def test_remove_sublist_default_no(self, runner, stored, data_file):
        """Test that removing a sublist is declined by default."""
        result = runner.invoke(main, ["remove", "1"], input="\n")
        assert result.exit_code == 1
        assert "Remove sublist 'b'? (y/N)" in result.output
        assert "Cancelled." in result.output
        assert load(data_file) == stored

    def test_remove_sublist_confirmed(self, runner, stored, data_file):
        """Test removing a sublist after confirming."""
        result = runner.invoke(main, ["remove", "1"], input="y\n")
        assert result.exit_code == 0, result.output
        assert titles(load(data_file).get(DEFAULT_LIST)) == ["a", "c", "d"]

    def test_remove_last_child_demotes(self, runner, stored, data_file):
        """Test that removing the last child demotes its sublist."""
        result = runner.invoke(main, ["remove", "2,0"], input="y\n")
        assert result.exit_code == 0, result.output
        assert isinstance(load(data_file).get(DEFAULT_LIST).items[2], Entry)

    def test_remove_bad_index(self, runner, stored):
        """Test that indexing into an entry is reported."""
        result = runner.invoke(main, ["remove", "0,0"])
        assert result.exit_code == 1
        assert "sub-indexing a non-list" in result.output

    def test_remove_unparseable_index(self, runner, stored):
        """Test that a malformed index is reported."""
        result = runner.invoke(main, ["remove", "first"])
        assert result.exit_code == 1
        assert "Invalid index 'first'" in result.output


class TestMoveEditSort:
    """Test move, edit and sort."""

    def test_move(self, runner, stored, data_file):
        """Test moving an entry into a sublist."""
        result = runner.invoke(main, ["move", "0", "1,1"])
        assert result.exit_code == 0, result.output
        lists = load(data_file)
        assert titles(lists.get(DEFAULT_LIST)) == ["b", "c", "d"]
        assert titles(lists.get(DEFAULT_LIST).items[0]) == ["b0", "b1"]
        assert titles(lists.get(DEFAULT_LIST).items[1]) == ["c0", "a"]

    def test_failed_move_saves_nothing(self, runner, stored, data_file):
        """Test that a failed move leaves the document unchanged."""
        result = runner.invoke(main, ["move", "0", "9"])
        assert result.exit_code == 1
        assert "Cannot move item 'a'" in result.output
        assert load(data_file) == stored

    def test_edit(self, runner, stored, data_file):
        """Test renaming an item while keeping its date."""
        result = runner.invoke(main, ["edit", "1"], input="renamed\n\n\n")
        assert result.exit_code == 0, result.output
        edited = load(data_file).get(DEFAULT_LIST).items[1]
        assert edited.title == "renamed"
        assert edited.date == stored.get(DEFAULT_LIST).items[1].date
        assert titles(edited) == ["b0", "b1"]

    def test_edit_clear_date(self, runner, stored, data_file):
        """Test clearing the date of an item."""
        result = runner.invoke(main, ["edit", "1"], input="\n-\n\n")
        assert result.exit_code == 0, result.output
        assert load(data_file).get(DEFAULT_LIST).items[1].date is None

    def test_sort(self, runner, stored, data_file):
        """Test sorting a list by date."""
        result = runner.invoke(main, ["sort"])
        assert result.exit_code == 0, result.output
        assert titles(load(data_file).get(DEFAULT_LIST)) == ["b", "a", "c", "d"]


class TestListCommand:
    """Test managing the list of lists."""

    def test_list_names(self, runner, stored):
        """Test listing the named lists."""
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["-> groceries"]

    def test_only_default(self, runner, data_file):
        """Test the hint shown when only the default list exists."""
        lists = ListCollection()
        lists.ensure_default()
        save_model(lists, data_file)
        result = runner.invoke(main, ["-l"])
        assert result.exit_code == 0, result.output
        assert "No named lists exist currently." in result.output

    def test_add_list(self, runner, stored, data_file):
        """Test creating a named list."""
        result = runner.invoke(main, ["list", "--add", "work"])
        assert result.exit_code == 0, result.output
        assert "added new to-do list: 'work'" in result.output
        assert "-> work" in result.output
        assert "work" in load(data_file)

    def test_add_list_prompted(self, runner, stored, data_file):
        """Test creating a named list from prompted details."""
        result = runner.invoke(main, ["list", "-a"], input="work\n2030/01/01\n\n")
        assert result.exit_code == 0, result.output
        assert load(data_file).get("work").date == DateOnly.model_validate({"value": "2030-01-01"})

    def test_add_list_date_without_name(self, runner, stored, data_file):
        """Test that --date without a list name is a usage error."""
        result = runner.invoke(main, ["list", "-a", "-d", "2030/01/01"])
        assert result.exit_code == 2
        assert "--date and --time need --add with a LIST NAME" in result.output
        assert load(data_file) == stored

    def test_add_duplicate_list(self, runner, stored, data_file):
        """Test that an existing list name is rejected."""
        result = runner.invoke(main, ["list", "-a", "groceries"])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert load(data_file) == stored

    def test_remove_list(self, runner, stored, data_file):
        """Test removing a named list after confirming."""
        result = runner.invoke(main, ["list", "-r", "groceries"], input="y\n")
        assert result.exit_code == 0, result.output
        assert "removed to-do list: 'groceries'" in result.output
        assert "groceries" not in load(data_file)

    def test_remove_list_default_no(self, runner, stored, data_file):
        """Test that removing a list is declined by default."""
        result = runner.invoke(main, ["list", "-r", "groceries"], input="\n")
        assert result.exit_code == 1
        assert "Cancelled." in result.output
        assert "groceries" in load(data_file)

    def test_remove_default_list(self, runner, stored):
        """Test that the default list cannot be removed."""
        result = runner.invoke(main, ["list", "-r", DEFAULT_LIST])
        assert result.exit_code == 1
        assert "cannot remove the default" in result.output

    def test_remove_missing_list(self, runner, stored):
        """Test removing a list that does not exist."""
        result = runner.invoke(main, ["list", "-r", "nope"])
        assert result.exit_code == 1
        assert "does not currently exist" in result.output

    def test_edit_list(self, runner, stored, data_file):
        """Test renaming a named list."""
        result = runner.invoke(main, ["list", "-e", "groceries"], input="shopping\n\n\n")
        assert result.exit_code == 0, result.output
        lists = load(data_file)
        assert "groceries" not in lists
        assert titles(lists.get("shopping")) == ["eggs"]

    def test_options_are_exclusive(self, runner, stored):
        """Test that --add, --remove and --edit cannot be combined."""
        result = runner.invoke(main, ["list", "-a", "x", "-r", "groceries"])
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output
