"""
Billing Commands.

Credit balance of the account.
"""

import typer

from cdn77_client.api.client import APIClient
from cdn77_client.api.decoding import decode_model
from cdn77_client.api.status import OutcomeKind, check_status, notice_on, success_on
from cdn77_client.commands._runner import CommandResult, run_command
from cdn77_client.core.utils import utc_from_timestamp
from cdn77_client.schemas.billing import CreditBalance

app = typer.Typer(help="Information about credit balance", no_args_is_help=True)

NO_PLAN_MESSAGE = "You do not have a PAYG tariff nor Monthly Plan active"

CREDIT_BALANCE_RULES = (
    success_on(200),
    notice_on(404, NO_PLAN_MESSAGE),
)


@app.command("credit-balance")
def credit_balance(ctx: typer.Context) -> None:
    """
    Show the current credit balance.

    Examples:
        cdn77 billing credit-balance
    """
    run_command(ctx, get_credit_balance)


async def get_credit_balance(client: APIClient) -> CommandResult:
    """GET /credit-balance."""
    response = await client.get("/credit-balance")

    outcome = check_status(response, CREDIT_BALANCE_RULES)
    if outcome.kind is OutcomeKind.NOTICE:
        return CommandResult.notice(outcome.message)

    balance = decode_model(response, CreditBalance)
    expires_at = utc_from_timestamp(balance.credit_expires_at)

    return CommandResult.lines(
        f"Current balance: {balance.current_credit} $",
        f"Balance expires at: {expires_at:%Y-%m-%d}",
        f"Last 30 days spent: {balance.credit_spent_in_30_days} $",
    )
