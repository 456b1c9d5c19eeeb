## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# perlist — Developer commands that exercise sharing and iterative release.
#

import time
from dataclasses import dataclass

import click

from .types import PersistentList, nil, add_reclaim_hook, remove_reclaim_hook
from .errors import ListError
from .formatting import format_item
from .runtime import Session


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    stats: bool


class ReclaimTrace:
    """Reclaim hook counting released elements, echoing them when verbose."""

    def __init__(self, verbose: int = 0):
        self.verbose = verbose
        self.elements: list = []
        self.start = time.perf_counter()

    def __call__(self, element) -> None:
        self.elements.append(element)
        if self.verbose > 0:
            click.echo(click.style("  ~ reclaimed ", dim=True) + format_item(element))

    def __enter__(self) -> 'ReclaimTrace':
        add_reclaim_hook(self)
        return self

    def __exit__(self, *exc_info) -> None:
        remove_reclaim_hook(self)

    def report(self) -> None:
        click.echo(click.style(" STATISTICS. ", reverse=True))
        click.echo(f"reclaimed\t{len(self.elements):,}")
        click.echo(f"time\t{time.perf_counter() - self.start:.3f}s")


@click.group()
@click.option('--verbose', '-v', default=0, count=True, help='Trace statements and reclaimed elements.')
@click.option('--stats', is_flag=True, help='Display reclaimed node count and elapsed time.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, stats: bool) -> None:
    ctx.obj = RuntimeConfig(verbose=verbose, stats=stats)


@cli.command('stress')
@click.option('--length', '-n', default=100_000, type=click.IntRange(min=0), help='Number of prepends in the chain.')
@click.pass_obj
def stress(config: RuntimeConfig, length: int) -> None:
    """Build an exclusively-owned chain, then release it in one go."""
    with ReclaimTrace(verbose=0) as trace:
        lst = nil
        for i in range(length):
            lst = lst.prepend(i)
        built = time.perf_counter()
        reclaimed = lst.release()
        click.echo(f"built\t{length:,} nodes in {built - trace.start:.3f}s")
        click.echo(f"released\t{reclaimed:,} nodes in {time.perf_counter() - built:.3f}s")
    if config.stats:
        trace.report()
    if reclaimed != length:
        raise click.ClickException(f"Released {reclaimed:,} of {length:,} nodes.")


@cli.command('scenario')
@click.pass_obj
def scenario(config: RuntimeConfig) -> None:
    """Show release order when a derived list goes away before its base."""
    with ReclaimTrace(verbose=config.verbose) as trace:
        list_1 = nil.prepend('A')
        list_321 = list_1.prepend('B').prepend('C')
        click.echo(f"list_1   = {format_item(list_1)}")
        click.echo(f"list_321 = {format_item(list_321)}")
        list_321.release()
        click.echo(f"after list_321: {' '.join(trace.elements)}")
        list_1.release()
        click.echo(f"after list_1:   {' '.join(trace.elements)}")
    if config.stats:
        trace.report()


@cli.command('eval')
@click.argument('sources', nargs=-1, required=True)
@click.pass_obj
def evaluate(config: RuntimeConfig, sources: tuple[str, ...]) -> None:
    """Run session statements in order, printing each result."""
    session = Session()
    with ReclaimTrace(verbose=config.verbose) as trace:
        for index, source in enumerate(sources, start=1):
            if not source.rstrip().endswith('.'):
                source = source.rstrip() + ' .'
            try:
                result = session.run(source, filename=f'<arg {index}>', verbosity=config.verbose)
            except ListError as exc:
                raise click.ClickException(f"{exc.location}: {type(exc).__name__}: {exc}") from exc
            if result is not None:
                click.echo(format_item(result))
            if isinstance(result, PersistentList):
                result.release()
        session.clear()
    if config.stats:
        trace.report()


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='perlist')


if __name__ == "__main__":
    main()
