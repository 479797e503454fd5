"""
symkit Command-Line Interface.

Provides the ``symkit`` entry point:

- ``symkit init``     : generate a starter loader recipe YAML
- ``symkit inspect``  : show parameters, inputs, outputs and artifacts
- ``symkit artifacts``: list artifacts, or print one with ``--show``

Usage:
    symkit inspect models/resnet 12
    symkit inspect --config recipe.yaml --set dtype=float64
    symkit artifacts models/resnet 12 --show synset.txt
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from pydantic import ValidationError

app = typer.Typer(
    name="symkit",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# ── App callback ────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from importlib.metadata import version as pkg_version

        typer.echo(f"symkit {pkg_version('symkit')}")
        raise typer.Exit()


@app.callback()
def main(
    _: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """symkit: checkpoint-backed model instances."""
    ...  # pragma: no cover


# ── Commands ────────────────────────────────────────────────────────────────


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Argument(help="Output YAML file path."),
    ] = Path("recipe.yaml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file."),
    ] = False,
) -> None:
    """Generate a starter loader recipe with all fields and defaults."""
    import yaml

    if output.exists() and not force:
        typer.echo(f"Error: '{output}' already exists. Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)

    data = {"model": _build_init_dict()}
    yaml_body = yaml.dump(
        data, default_flow_style=False, sort_keys=False, indent=4, allow_unicode=True
    )
    output.write_text(_INIT_HEADER.format(filename=output.name) + yaml_body, encoding="utf-8")
    typer.echo(f"Recipe created: {output}")
    typer.echo(f"Inspect with:   symkit inspect --config {output}")


@app.command()
def inspect(
    prefix: Annotated[
        Optional[str],
        typer.Argument(help="Checkpoint prefix, e.g. models/resnet."),
    ] = None,
    epoch: Annotated[
        Optional[int],
        typer.Argument(help="Checkpoint epoch."),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML loader recipe."),
    ] = None,
    dtype: Annotated[
        Optional[str],
        typer.Option("--dtype", "-t", help="Cast parameters to this element type."),
    ] = None,
    set_: Annotated[
        Optional[list[str]],
        typer.Option("--set", help="Override recipe value (repeatable): key=value"),
    ] = None,
) -> None:
    """Show the parameters, required inputs, outputs and artifacts of a checkpoint."""
    from symkit import Model, SymkitError

    cfg = _resolve_config(prefix, epoch, config, dtype, set_ or [])
    _setup_logging(cfg)

    try:
        with Model.from_config(cfg) as model:
            typer.echo(f"Model      : {model.name} (epoch {model.epoch})")
            typer.echo(f"Directory  : {model.artifact_root}")
            typer.echo(f"Parameters : {len(model.parameters)}")
            for name, tensor in model.parameters:
                typer.echo(f"  {name:<32} {_describe_tensor(model, tensor)}")
            typer.echo("Inputs     : " + ", ".join(d.name for d in model.describe_input()))
            typer.echo("Outputs    : " + ", ".join(d.name for d in model.describe_output()))
            names = model.list_artifacts()
            typer.echo(f"Artifacts  : {len(names)}")
            for name in names:
                typer.echo(f"  {name}")
    except SymkitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def artifacts(
    prefix: Annotated[str, typer.Argument(help="Checkpoint prefix, e.g. models/resnet.")],
    epoch: Annotated[int, typer.Argument(help="Checkpoint epoch.")],
    show: Annotated[
        Optional[str],
        typer.Option("--show", "-s", help="Print this artifact as UTF-8 text."),
    ] = None,
) -> None:
    """List the artifacts stored next to a checkpoint."""
    from symkit import SymkitError, load_model

    try:
        with load_model(prefix, epoch) as model:
            if show is None:
                for name in model.list_artifacts():
                    typer.echo(name)
                return
            text = model.get_artifact(show, lambda stream: stream.read().decode("utf-8"))
            typer.echo(text, nl=not text.endswith("\n"))
    except (SymkitError, UnicodeDecodeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


# ── Private helpers ─────────────────────────────────────────────────────────

RESOLVED_CONFIG_NAME = "loader_config.yaml"

_INIT_HEADER = """\
# ==============================================================================
# symkit loader recipe (generated by `symkit init`)
# ==============================================================================
# Usage:   symkit inspect --config {filename}
#
# prefix: checkpoint prefix, files are <prefix>-<epoch:04d>.params and
#         <prefix>-symbol.json
# dtype:  optional cast target (float16, float32, float64, uint8, int8, int32, int64)
# ==============================================================================

"""


def _build_init_dict() -> dict[str, Any]:
    """Default recipe body built from LoaderConfig field defaults."""
    from symkit.core.config import LoaderConfig

    defaults = LoaderConfig(prefix="models/my_model").model_dump(mode="json")
    return defaults


def _resolve_config(
    prefix: str | None,
    epoch: int | None,
    config: Path | None,
    dtype: str | None,
    raw_overrides: list[str],
):
    """Merge recipe, positional arguments and ``--set`` overrides into a LoaderConfig."""
    from symkit.core.config import LoaderConfig
    from symkit.core.io import load_config_from_yaml

    data: dict[str, Any] = {}
    if config is not None:
        if not config.exists():
            typer.echo(f"Error: recipe not found: {config}", err=True)
            raise typer.Exit(code=1)
        raw = load_config_from_yaml(config) or {}
        data.update(raw.get("model", raw))
    if prefix is not None:
        data["prefix"] = prefix
    if epoch is not None:
        data["epoch"] = epoch
    if dtype is not None:
        data["dtype"] = dtype
    data.update(_parse_overrides(raw_overrides))

    if "prefix" not in data:
        typer.echo("Error: provide a checkpoint PREFIX or --config recipe.", err=True)
        raise typer.Exit(code=1)

    try:
        return LoaderConfig.model_validate(data)
    except ValidationError as e:
        typer.echo(f"Error: invalid configuration:\n{e}", err=True)
        raise typer.Exit(code=1)


def _setup_logging(cfg) -> None:
    """Configure logging; with a log directory, also snapshot the resolved recipe there."""
    from symkit.core import LOGGER_NAME, Logger, save_config_as_yaml

    Logger.setup(name=LOGGER_NAME, log_dir=cfg.log_dir, level=cfg.log_level)
    if cfg.log_dir is not None:
        save_config_as_yaml(cfg, cfg.log_dir / RESOLVED_CONFIG_NAME)


def _describe_tensor(model, tensor) -> str:
    if tensor is None:
        return "<unset>"
    shape = "x".join(str(d) for d in tensor.shape) or "scalar"
    return f"{model.engine.data_type(tensor).value:<8} {shape}"


def _auto_cast(value: str) -> Any:
    """
    Cast a CLI string to the appropriate Python scalar type.

    Returns:
        Converted bool, None, int, float, or the original string.
    """
    low = value.lower()
    if low in ("true", "false"):
        return low == "true"
    if low in ("null", "none"):
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def _parse_overrides(raw: list[str]) -> dict[str, Any]:
    """
    Parse ``key=value`` strings into an override dict.

    Raises:
        typer.BadParameter: If an item has no ``=`` or an empty key.
    """
    overrides: dict[str, Any] = {}
    for item in raw:
        if "=" not in item:
            raise typer.BadParameter(f"Override must use key=value format, got: '{item}'")
        key, _, val = item.partition("=")
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Empty key in override: '{item}'")
        overrides[key] = _auto_cast(val.strip())
    return overrides
