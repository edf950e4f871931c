'''
To Run:
python -m telephone_bill.cli calls.csv
'''
import click
import logging
from pathlib import Path
from telephone_bill import statement
from telephone_bill.calculator import calculate
from telephone_bill.config import TariffConfigError, load_tariff
from telephone_bill.log_parser import ParseError, parse_log

logger = logging.getLogger(__name__)

@click.command()
@click.option('--itemize', 'show_items', is_flag=True, help='Print the price of every call')
@click.option('--tariff', 'tariff_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help='Tariff YAML to use instead of the packaged one')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
@click.argument('log_file', type=click.File('r'))
def main(show_items, tariff_path, verbose, log_file):
    """
    Print the total price of the calls in LOG_FILE ("-" reads stdin).

    Calls to the most frequently called number are free.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(levelname)s: %(message)s')

    phone_log = log_file.read()
    logger.debug(f"Read {len(phone_log)} characters from {log_file.name}")

    try:
        tariff = load_tariff(tariff_path)
        bill_total = calculate(phone_log, tariff)
        if show_items:
            charges = statement.itemize(parse_log(phone_log), tariff)
    except (ParseError, TariffConfigError) as e:
        raise click.ClickException(str(e)) from e

    if show_items:
        if charges:
            click.echo(statement.to_frame(charges).to_string(index=False))
        else:
            click.echo("No calls in log")
        click.echo("")

    click.echo(f"Total: {bill_total}")

if __name__ == '__main__':
    main()
