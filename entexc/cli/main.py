import click, json, logging
from entexc.codec import DEFAULT_MULTIPLIER, class_code_ceiling, decode as decode_code, encode as encode_code, format_code
from entexc.config import get_default_config
from entexc.detector import validate as validate_registry
from entexc.errors import EntexcError
from entexc.report import describe, format_listing
from entexc.startup import load_registry

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log loading and validation details")
def cli(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

def _load(path):
    try:
        return load_registry(path, get_default_config())
    except EntexcError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)

@cli.command()
@click.argument("path", required=False)
@click.option("-s", "--section", "sections", multiple=True, help="Only validate these sections")
@click.option("--ceiling", type=int, default=None, help="Deployment global code ceiling")
@click.option("--strict-opt-out", is_flag=True, help="Reject scaled codes that clash with opt-out base codes")
@click.option("--json", "as_json", is_flag=True, help="Print problems as JSON")
def validate(path, sections, ceiling, strict_opt_out, as_json):
    """
    Check a registry file for configuration defects and code collisions.

    \b
    Examples:
      entexc validate errors.yaml
      entexc validate errors.yaml --section billing --ceiling 2147483647
    """
    config = get_default_config()
    registry = _load(path)
    problems = validate_registry(
        registry,
        global_ceiling=ceiling if ceiling is not None else config.global_ceiling,
        sections=sections or None,
        strict_opt_out=strict_opt_out or config.strict_opt_out,
    )
    if as_json:
        click.echo(json.dumps([p.as_dict() for p in problems], indent=2))
    elif not problems:
        click.echo("OK")
    else:
        for problem in problems:
            click.echo(str(problem))
            if problem.hint:
                click.echo(f"  hint: {problem.hint}")
        click.echo(f"{len(problems)} problem(s) found", err=True)
    if problems:
        raise SystemExit(1)

@cli.command()
@click.argument("class_code", type=int)
@click.argument("base_code", type=int)
@click.option("-m", "--multiplier", type=int, default=DEFAULT_MULTIPLIER, show_default=True)
def encode(class_code, base_code, multiplier):
    """Print the global code of CLASS_CODE and BASE_CODE."""
    try:
        click.echo(format_code(encode_code(class_code, base_code, multiplier)))
    except EntexcError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)

@cli.command()
@click.argument("global_code", type=int)
@click.option("-m", "--multiplier", type=int, default=DEFAULT_MULTIPLIER, show_default=True)
def decode(global_code, multiplier):
    """Print the class code and base code of GLOBAL_CODE."""
    try:
        class_code, base_code = decode_code(global_code, multiplier)
    except EntexcError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)
    click.echo(f"class_code={class_code} base_code={base_code}")

@cli.command()
@click.option("-m", "--multiplier", type=int, default=None, help="Multiplier (default from config)")
@click.option("--ceiling", type=int, default=None, help="Global ceiling (default from config)")
def ceiling(multiplier, ceiling):
    """Print the exclusive upper bound for class codes."""
    config = get_default_config()
    try:
        limit = class_code_ceiling(
            multiplier if multiplier is not None else config.default_multiplier,
            ceiling if ceiling is not None else config.global_ceiling,
        )
    except EntexcError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)
    click.echo(str(limit))

@cli.command(name="list")
@click.argument("path", required=False)
@click.option("-s", "--section", "sections", multiple=True, help="Only list these sections")
@click.option("-x", "--exclude-section", "excluded", multiple=True, help="Skip these sections")
def list_codes(path, sections, excluded):
    """List every configured code of a registry with its message."""
    registry = _load(path)
    try:
        listings = describe(
            registry,
            sections=sections or None,
            exclude_sections=excluded,
            system_locale=get_default_config().system_locale,
        )
    except EntexcError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)
    click.echo(format_listing(listings))

@cli.command()
def config():
    """Print the configuration summary."""
    click.echo(get_default_config().get_summary())

if __name__ == "__main__":
    cli()
