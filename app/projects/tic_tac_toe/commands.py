import click
from flask.cli import with_appcontext
from app.projects.tic_tac_toe.core.constants import SCOREBOARD_LIMIT
from app.projects.tic_tac_toe.services.game_store import GameStore
from app.utils.logging import log_activity
import logging
import math

logger = logging.getLogger(__name__)


def format_board(board):
    """Render a flat board as text rows, '.' for empty cells."""
    size = math.isqrt(len(board))
    rows = []
    for r in range(size):
        cells = board[r * size:(r + 1) * size]
        rows.append(' '.join(cell or '.' for cell in cells))
    return '\n'.join(rows)


@click.group(name='tic-tac-toe')
def tic_tac_toe_cli():
    """Tic-Tac-Toe project commands."""
    pass

@tic_tac_toe_cli.command('scoreboard')
@click.option('--limit', default=SCOREBOARD_LIMIT, show_default=True, help='Number of finished games to show')
@with_appcontext
def scoreboard_command(limit):
    """Show the most recent results."""
    games = GameStore().scoreboard(limit)
    if games is None:
        raise click.ClickException("Unable to load the scoreboard")
    if not games:
        click.echo("No finished games yet.")
        return
    for game in games:
        click.echo(f"#{game['id']}: {game['status']}")

@tic_tac_toe_cli.command('recent')
@click.option('--limit', default=SCOREBOARD_LIMIT, show_default=True, help='Number of finished games to show')
@with_appcontext
def recent_command(limit):
    """Show recent finished games with their final boards."""
    games = GameStore().recent_completed(limit)
    if games is None:
        raise click.ClickException("Unable to load recent games")
    if not games:
        click.echo("No finished games yet.")
        return
    for game in games:
        click.echo(f"#{game['id']} ({game['size']}x{game['size']}) {game['status']} at {game['created_at']}")
        click.echo(format_board(game['board']))
        click.echo("")

@tic_tac_toe_cli.command('show')
@click.argument('game_id', type=int)
@with_appcontext
def show_command(game_id):
    """Print a stored board."""
    game = GameStore().get(game_id)
    if game is None:
        raise click.ClickException(f"Game {game_id} not found")
    click.echo(f"Viewing Game #{game['id']} - {game['status']}")
    click.echo(format_board(game['board']))

@tic_tac_toe_cli.command('stats')
@with_appcontext
def stats_command():
    """Count wins and draws over all finished games."""
    counts = GameStore().result_counts()
    if counts is None:
        raise click.ClickException("Unable to count results")
    for status, count in counts.items():
        click.echo(f"{status}: {count}")

@tic_tac_toe_cli.command('purge')
@with_appcontext
def purge_command():
    """Delete intermediate move records, keeping finished games."""
    deleted = GameStore().purge_in_progress()
    if deleted is None:
        raise click.ClickException("Purge failed, no records were deleted")
    log_activity('tic_tac_toe', 'Maintenance', f"Purged {deleted} intermediate move records.")
    logger.info(f"Purged {deleted} intermediate tic-tac-toe records")
    click.echo(f"Deleted {deleted} intermediate move records.")
