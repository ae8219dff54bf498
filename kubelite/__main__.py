import signal
import threading
from typing import Tuple

import click
from dotenv import load_dotenv

from kubelite.config.provider import InClusterConfigProvider
from kubelite.errors import KubeliteError, NotFoundError
from kubelite.logging_config import configure_logging
from kubelite.modules.pods import PodClient, label_patches

load_dotenv()

NOT_FOUND_EXIT_CODE = 2


def install_stop_handlers(stop_event: threading.Event) -> None:
    """Set the stop event on SIGINT/SIGTERM so pending retries are abandoned."""

    def _stop(signum, frame):
        stop_event.set()

    signal.signal(signal.SIGINT, _stop)
    signal.signal(signal.SIGTERM, _stop)


def parse_labels(pairs: Tuple[str, ...]) -> dict:
    labels = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="LABELS")
        labels[key] = value
    return labels


def run(operation):
    """Run an operation, mapping kubelite errors to CLI exit codes."""
    try:
        return operation()
    except NotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        click.get_current_context().exit(NOT_FOUND_EXIT_CODE)
    except KubeliteError as e:
        raise click.ClickException(str(e))


def build_client(stop_event: threading.Event) -> PodClient:
    try:
        return run(lambda: PodClient.in_cluster(stop_event, config_provider=InClusterConfigProvider()))
    except OSError as e:
        raise click.ClickException(f"unable to read service account credentials: {e}")


def read_pod(client: PodClient, namespace: str, pod_name: str):
    pod = run(lambda: client.get_pod(namespace, pod_name))
    if pod is None:
        raise click.ClickException("interrupted before the pod could be read")
    return pod


@click.group()
@click.option("--log-level", "log_level", default="WARNING", envvar="LOG_LEVEL", show_default=True)
@click.pass_context
def main(ctx: click.Context, log_level: str):
    """Read and label pods from inside the cluster."""
    configure_logging(log_level)

    stop_event = threading.Event()
    install_stop_handlers(stop_event)
    ctx.obj = stop_event


@main.command()
@click.option("--namespace", "namespace", envvar="POD_NAMESPACE", default="")
@click.option("--pod", "pod_name", envvar="POD_NAME", default="")
@click.pass_obj
def get(stop_event: threading.Event, namespace: str, pod_name: str):
    """Print a pod's metadata as JSON."""
    pod = read_pod(build_client(stop_event), namespace, pod_name)
    click.echo(pod.model_dump_json(indent=2))


@main.command()
@click.option("--namespace", "namespace", envvar="POD_NAMESPACE", default="")
@click.option("--pod", "pod_name", envvar="POD_NAME", default="")
@click.argument("labels", nargs=-1, required=True)
@click.pass_obj
def label(stop_event: threading.Event, namespace: str, pod_name: str, labels: Tuple[str, ...]):
    """Set KEY=VALUE labels on a pod."""
    desired = parse_labels(labels)
    client = build_client(stop_event)

    pod = read_pod(client, namespace, pod_name)
    patches = label_patches(pod, desired)
    run(lambda: client.patch_pod(namespace, pod_name, *patches))
    click.echo(f"Labeled pod {namespace}/{pod_name} ({len(patches)} patch operation(s))")


if __name__ == "__main__":
    main()
