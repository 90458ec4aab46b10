import binascii
import logging
import sys

import click
import yaml
from colorama import Fore, Style

from .diff.filters import exclude_paths, exclude_regexp, filter_paths, filter_regexp
from .emit.report import JSONReport
from .errors import DiffKitError
from .utils.io import load_manifest

EXIT_DIFFERENCES = 1
EXIT_ERROR = 255


class DiffKitClickError(click.ClickException):
    exit_code = EXIT_ERROR


@click.group(context_settings={"auto_envvar_prefix": "YAML_DIFFKIT"})
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
def main(verbose):
    """yaml-diffkit: Filter → Render structural YAML diff reports"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")


@main.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.option("--filter", "filters", multiple=True, help="Only report differences at this path (repeatable).")
@click.option("--exclude", "excludes", multiple=True, help="Drop differences below this go-patch path (repeatable).")
@click.option("--filter-regexp", "filter_regexps", multiple=True, help="Only report paths matching this regular expression.")
@click.option("--exclude-regexp", "exclude_regexps", multiple=True, help="Drop paths matching this regular expression.")
@click.option("--use-go-patch-style", is_flag=True, default=False, help="Render paths as go-patch paths (/a/b).")
@click.option("-o", "--output", type=click.Path(dir_okay=False, writable=True), help="Write the report to a file instead of stdout.")
@click.option("--set-exit-code", is_flag=True, default=False,
              help="Exit with 1 when differences remain, 0 when there are none.")
def report(manifest, filters, excludes, filter_regexps, exclude_regexps, use_go_patch_style, output, set_exit_code):
    """Render the diff manifest MANIFEST as a JSON report"""
    try:
        rep = load_manifest(manifest)
        rep = filter_paths(rep, *filters)
        rep = exclude_paths(rep, *excludes)
        rep = filter_regexp(rep, *filter_regexps)
        rep = exclude_regexp(rep, *exclude_regexps)
        renderer = JSONReport(rep, use_go_patch_paths=use_go_patch_style)
        if output:
            payload = renderer.gen_report().to_json()
            with open(output, "w", encoding="utf-8") as f:
                f.write(payload)
            click.echo(Fore.GREEN + f"report written to: {output}" + Style.RESET_ALL, err=True)
        else:
            renderer.write_report(sys.stdout)
            click.echo()
    except (DiffKitError, yaml.YAMLError, binascii.Error, OSError) as exc:
        raise DiffKitClickError(str(exc)) from exc

    if set_exit_code and rep.diffs:
        sys.exit(EXIT_DIFFERENCES)


if __name__ == "__main__":
    main()
