import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .errors import ODataModelError
from .pipeline import GeneratorSettings, ModelGenerator, Modularity, ResolverConfig


@click.command()
@click.option("--source", "-s", default="", type=str, help="Service address recorded in the header")
@click.option(
    "--modularity",
    "-m",
    default=Modularity.MODULAR.value,
    type=click.Choice([m.value for m in Modularity]),
)
@click.option("--template", "-t", default="", type=str, help="Template name recorded in the header")
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail on dangling references instead of reporting them",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, required=False, type=click.Path(resolve_path=True))
def odata_to_code(source, modularity, template, strict, verbose, path, output):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="# %(message)s")

    with open(path, "rb") as f:
        metadata = f.read()

    settings = GeneratorSettings(
        source=source or path,
        modularity=Modularity(modularity),
        use_template=template,
    )
    config = ResolverConfig(strict=strict, settings=settings)

    try:
        model = ModelGenerator(metadata, config, command=reconstruct_command_line(odata_to_code)).generate()
    except ODataModelError as e:
        raise click.ClickException(str(e)) from e

    out = json.dumps(model.to_dict(), indent=2)
    if output is None:
        click.echo(out)
    else:
        with open(output, "w") as f:
            f.write(out)
