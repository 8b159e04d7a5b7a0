"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from declint.infrastructure.di.container import DeclintContainer
from declint.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    deps = CLIDependencies(container_factory=DeclintContainer)
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
