"""CLI entry point for video-notes."""

from __future__ import annotations

import sys

import click

from video_notes import __version__


@click.command()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to YAML config file.',
)
@click.option(
    '-s',
    '--server-url',
    default=None,
    help='Base URL of the summarization server (e.g. http://localhost:3000).',
)
@click.option(
    '--facing',
    default=None,
    type=click.Choice(['environment', 'user']),
    help='Camera to open at start-up.',
)
@click.version_option(version=__version__)
def cli(config_path, server_url, facing):
    """video-notes -- live camera, spoken notes and one-key summaries in the terminal."""
    from pydantic import ValidationError  # noqa: PLC0415 -- deferred: not needed for --help

    from video_notes.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from video_notes.l4_frameworks_and_drivers.infra_config import (  # noqa: PLC0415 -- deferred: not needed for --help
        InfraConfig,
        build_app_config,
    )

    overrides: dict = {}
    if server_url:
        overrides['server'] = {'base_url': server_url}
    if facing:
        overrides['camera'] = {'default_facing': facing}

    try:
        raw = YamlConfigLoader().load_raw(config_path, overrides=overrides if overrides else None)
        config = build_app_config(raw)
        infra = InfraConfig.model_validate(raw)
    except FileNotFoundError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)
    except ValidationError as e:
        click.echo(f'Error: invalid configuration\n{e}', err=True)
        sys.exit(1)

    _preflight_microphone()

    from video_notes.l4_frameworks_and_drivers.app import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for --help
        App,
    )
    from video_notes.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: camera/audio stack not loaded for --help
        DependencyContainer,
    )

    container = DependencyContainer(config, infra=infra)
    app = App(controller=container.controller, observer=container.observer)
    app.run()


def _preflight_microphone() -> None:
    try:
        import sounddevice as sd  # noqa: PLC0415 -- deferred: not loaded on --help

        devices = sd.query_devices()
        input_devices = [d for d in devices if d['max_input_channels'] > 0]
        if not input_devices:
            click.echo('Warning: No input audio devices found. Note taking will be unavailable.', err=True)
    except Exception as e:
        click.echo(f'Warning: Cannot query audio devices ({e}).', err=True)
