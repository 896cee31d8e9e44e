from cli.app import cli


def main():
    """Entry point for the a9s CLI. Delegates to cli.app:cli."""
    cli()


if __name__ == "__main__":
    main()
