from __future__ import annotations

import snowflake.connector

from champ_funnel.config import Settings


def get_snowflake_connection(settings: Settings):
    """
    Snowflake connection factory.
    Credentials come from the Settings instance passed in, never from os.environ.
    """
    params = {k: v for k, v in settings.snowflake_params.items() if v is not None}
    return snowflake.connector.connect(**params)


def check_snowflake(settings: Settings) -> str:
    """Health probe: run a trivial query and report the connected user."""
    try:
        conn = get_snowflake_connection(settings)
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT CURRENT_USER()")
            result = cursor.fetchone()
            cursor.close()
        finally:
            conn.close()
        return f"healthy (User: {result[0]})"
    except Exception as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"
