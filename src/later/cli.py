"""
Command Line Interface for later.
"""

import functools
import click
from .version import VERSION
from .config import load_settings
from .data import DataCore
from .logs import setup_logging, get_logger
from .models import DEFAULT_LIST, Entry, Sublist, IndexPath, from_parts, parse_date, parse_time
from .prompt import confirm, prompt_for_info
from .recovery import LaterError, CancelledError, ParseError
from .render import header_line, render
from . import tree

log = get_logger("cli")

# short aliases for the commands, e.g. `later -a milk`
SHORT_FLAGS = {
    '-a': 'add',
    '-r': 'remove',
    '-l': 'list',
    '-m': 'move',
    '-e': 'edit',
    '-s': 'sort',
}


class ListNameGroup(click.Group):
    """Group that takes an optional list name before the command."""

    def parse_args(self, ctx, args):
        args = [*args]
        k = 0
        while k < len(args):
            token = args[k]
            if token == '--list-name':
                k += 2
            elif token.startswith('-') and token not in SHORT_FLAGS:
                k += 1
            else:
                break

        if k < len(args) and args[k] not in SHORT_FLAGS and args[k] not in self.commands:
            args[k:k + 1] = ['--list-name', args[k]]
            k += 2
        if k < len(args) and args[k] in SHORT_FLAGS:
            args[k] = SHORT_FLAGS[args[k]]

        return super().parse_args(ctx, args)


class App:
    """State shared by the commands of one invocation."""

    def __init__(self, core, list_name, settings):
        self.core = core
        self.list_name = list_name
        self.settings = settings

    @property
    def active(self) -> Sublist:
        return self.core.get_list(self.list_name)

    def save(self):
        self.core.save()


def handle_errors(func):
    """Turn later errors into a message and a non-zero exit status."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LaterError as e:
            log.debug(f"{func.__name__} failed: {e!r}")
            raise click.ClickException(str(e)) from e
    return wrapper


def _date_from_options(date_text, time_text):
    day = parse_date(date_text) if date_text else None
    clock = parse_time(time_text) if time_text else None
    return from_parts(day, clock)


def _require_title(title):
    if not title.strip():
        raise ParseError("Please give the new item a title.")
    return title


@click.group(cls=ListNameGroup, invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="later")
@click.option('--list-name', default=DEFAULT_LIST, metavar='LIST NAME',
              help='Name of the to-do list; may also be given as the first argument')
@click.option('-v', '--verbose', is_flag=True, help='Print debug messages')
@click.pass_context
@handle_errors
def main(ctx, list_name, verbose):
    """
    later - a to-do list program with nested lists.

    The index of a nested item is a comma-separated list of integers starting
    with the top-level index, e.g. `later add 1,3,1,2`.
    """
    settings = load_settings()
    setup_logging(settings.log_dir, verbose=verbose)

    core = DataCore(settings.data_file)
    core.load()
    if core.created:
        click.echo(f"Generating new storage file in {core.data_file}", err=True)

    # fail early on an unknown list name
    core.get_list(list_name)
    ctx.obj = App(core, list_name, settings)


@main.result_callback()
@click.pass_obj
def show_active_list(app, result, **kwargs):
    """Print the active list after every command that doesn't opt out."""
    if result is False or app is None:
        return
    click.echo(render(app.active, indent=" " * app.settings.indent), nl=False)


@main.command()
@click.argument('index', required=False)
@click.argument('name', required=False)
@click.option('-d', '--date', 'date_text', metavar='YYYY/MM/DD', help='Due date, used with NAME')
@click.option('-t', '--time', 'time_text', metavar='HH:MM', help='Due time, used with NAME')
@click.pass_obj
@handle_errors
def add(app, index, name, date_text, time_text):
    """Add an item to a list.

    INDEX selects the (sub)list to append to; an entry found there becomes a
    sublist. A single argument that is not an index is taken as the NAME.
    Without a NAME the details are prompted for.
    """
    path = IndexPath()
    if index is not None:
        if name is None and not IndexPath.validate_path(index):
            name = index
        else:
            path = IndexPath.parse(index)

    if name is None:
        if date_text or time_text:
            raise click.UsageError("--date and --time need a NAME; without one the details are prompted for")
        title, date = prompt_for_info()
    else:
        title, date = _require_title(name), _date_from_options(date_text, time_text)

    tree.add_item(app.active, Entry(title=title, date=date), path)
    app.save()


@main.command()
@click.argument('index')
@click.pass_obj
@handle_errors
def remove(app, index):
    """Remove an item from a list."""
    path = IndexPath.parse(index)
    item = tree.get_item(app.active, path)
    if isinstance(item, Sublist):
        confirmed = confirm(f"Remove sublist '{item.title}'?", default=False)
    else:
        confirmed = confirm(f"Remove entry '{item.title}'?", default=True)
    if not confirmed:
        raise CancelledError("Cancelled.")

    tree.remove_item(app.active, path)
    app.save()


@main.command()
@click.argument('from_index', metavar='FROM')
@click.argument('to_index', metavar='TO')
@click.pass_obj
@handle_errors
def move(app, from_index, to_index):
    """Move an item within a list.

    TO is read after the item has been taken out of FROM.
    """
    tree.move_item(app.active, IndexPath.parse(from_index), IndexPath.parse(to_index))
    app.save()


@main.command()
@click.argument('index')
@click.pass_obj
@handle_errors
def edit(app, index):
    """Edit the title and date of an item."""
    path = IndexPath.parse(index)
    title, date = prompt_for_info(tree.get_item(app.active, path))
    tree.edit_item(app.active, path, title, date)
    app.save()


@main.command()
@click.pass_obj
@handle_errors
def sort(app):
    """Sort a list by date, nested lists included."""
    tree.sort_items(app.active)
    app.save()


@main.command('list')
@click.option('-a', '--add', 'add_name', is_flag=False, flag_value='', default=None,
              metavar='[LIST NAME]', help='Create a new to-do list')
@click.option('-r', '--remove', 'remove_name', metavar='LIST NAME', help='Delete a to-do list')
@click.option('-e', '--edit', 'edit_name', metavar='LIST NAME', help='Edit a to-do list')
@click.option('-d', '--date', 'date_text', metavar='YYYY/MM/DD', help='Due date for --add')
@click.option('-t', '--time', 'time_text', metavar='HH:MM', help='Due time for --add')
@click.pass_obj
@handle_errors
def list_lists(app, add_name, remove_name, edit_name, date_text, time_text):
    """Interact with the list of lists."""
    chosen = [name for name in (add_name, remove_name, edit_name) if name is not None]
    if len(chosen) > 1:
        raise click.UsageError("--add, --remove and --edit are mutually exclusive")
    if (date_text or time_text) and not add_name:
        raise click.UsageError("--date and --time need --add with a LIST NAME")

    lists = app.core.lists
    if add_name is not None:
        if add_name:
            title, date = add_name, _date_from_options(date_text, time_text)
        else:
            title, date = prompt_for_info()
        lists.add(_require_title(title), date)
        app.save()
        click.echo(f"added new to-do list: '{title}'")

    elif remove_name is not None:
        lists.check_removable(remove_name)
        if not confirm(f"Remove list '{remove_name}'?", default=False):
            raise CancelledError("Cancelled.")
        lists.remove(remove_name)
        app.save()
        click.echo(f"removed to-do list: '{remove_name}'")

    elif edit_name is not None:
        title, date = prompt_for_info(lists.get(edit_name))
        lists.edit(edit_name, title, date)
        app.save()
        click.echo(f"edited to-do list: '{title}'")

    named = lists.named_lists()
    if not named:
        click.echo("No named lists exist currently. (Use `later list --add` to create one.)", err=True)
    for named_list in named:
        click.echo(header_line(named_list))

    # the active list is not shown after list management
    return False


if __name__ == "__main__":
    main()
