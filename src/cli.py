import click

from apps.shopware.shopware_cli import shopware_cli


@click.group()
def cli():
    pass


cli.add_command(shopware_cli, name="shopware")


if __name__ == "__main__":
    cli()
