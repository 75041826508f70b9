import sys
from pathlib import Path
from typing import Optional

import click

from webjob.modules.config import CONNECTION_STRING_ENV, SHUTDOWN_FILE_ENV, WorkerConfig
from webjob.modules.errors import ConfigurationError
from webjob.modules.logging import create_logger, BaseLogger
from webjob.modules.worker import WorkerRuntime, EXIT_CONFIG_ERROR, EXIT_WORK_FAILED


class WebJobContext:
    """Context object to store CLI state."""
    def __init__(self):
        self.logger: Optional[BaseLogger] = None

pass_context = click.make_pass_decorator(WebJobContext, ensure=True)

@click.group()
@click.option('--output', '-o',
              type=click.Choice(['colorful', 'plain', 'json']),
              default='plain',
              help='Log format (colorful for terminals, plain for hosted log streams, json for machine parsing)',
              envvar='WEBJOB_LOG_FORMAT')
@click.option('--log-level', '-l',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              default='INFO',
              help='Set the logging level',
              envvar='WEBJOB_LOG_LEVEL')
@pass_context
def cli(ctx, output, log_level):
    """WebJob worker: writes a timestamp every interval and shuts down gracefully."""
    ctx.logger = create_logger(output, log_level)


@cli.command(name='run')
@click.option('--connection-string', help='Telemetry sink: console:// or a Prometheus push gateway URL',
              envvar=CONNECTION_STRING_ENV)
@click.option('--shutdown-file', type=click.Path(path_type=Path),
              help='Marker file whose appearance requests shutdown', envvar=SHUTDOWN_FILE_ENV)
@click.option('--output-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Directory receiving output.txt', envvar='WEBJOB_OUTPUT_DIR')
@click.option('--interval', type=float, help='Seconds between iterations', envvar='WEBJOB_INTERVAL')
@click.option('--heartbeat', 'heartbeat_ceiling', type=int,
              help='Heartbeat lines logged while shutting down (0 disables)', envvar='WEBJOB_HEARTBEAT')
@click.option('--watcher-timeout', type=float,
              help='Seconds to wait for the shutdown file watcher to stop', envvar='WEBJOB_WATCHER_TIMEOUT')
@pass_context
def run(ctx, connection_string: Optional[str], shutdown_file: Optional[Path], output_dir: Optional[Path],
        interval: Optional[float], heartbeat_ceiling: Optional[int], watcher_timeout: Optional[float]):
    """Run the worker until it is asked to stop."""
    logger = ctx.logger
    try:
        config = WorkerConfig.load(
            connection_string=connection_string,
            shutdown_file=shutdown_file,
            output_dir=output_dir,
            work_interval=interval,
            heartbeat_ceiling=heartbeat_ceiling,
            watcher_join_timeout=watcher_timeout
        )
        runtime = WorkerRuntime(config, logger)
    except ConfigurationError as err:
        logger.log_error(f"Configuration error: {str(err)}")
        logger.flush()
        sys.exit(EXIT_CONFIG_ERROR)

    try:
        exit_code = runtime.run()
    except Exception as err:
        logger.log_exception(f"Unexpected error in worker: {str(err)}", err)
        exit_code = EXIT_WORK_FAILED
    logger.log_info(f"Exiting with status {exit_code}")
    logger.flush()
    sys.exit(exit_code)


def main():
    cli()

if __name__ == '__main__':
    main()
