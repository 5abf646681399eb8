import json
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ConfigDict, SecretStr
from pydantic import ValidationError as PydanticValidationError

from todo_api.exceptions import CredentialRetrievalError

logger = logging.getLogger(__name__)


class DatabaseCredentials(BaseModel):
    # RDS secrets also carry engine, dbname, dbInstanceIdentifier...
    model_config = ConfigDict(extra="ignore", frozen=True)

    host: str
    port: int
    username: str
    password: SecretStr


def create_secrets_client(region_name: str):
    return boto3.client("secretsmanager", region_name=region_name)


class CredentialResolver:
    """Reads database credentials from Secrets Manager on every call."""

    def __init__(self, client, secret_id: str):
        self.client = client
        self.secret_id = secret_id

    def resolve(self) -> DatabaseCredentials:
        try:
            response = self.client.get_secret_value(SecretId=self.secret_id)
            secret_string = response.get("SecretString")
            if not secret_string:
                raise ValueError("SecretString is empty")
            payload = json.loads(secret_string)
            if not isinstance(payload, dict):
                raise ValueError("secret payload is not a JSON object")
            return DatabaseCredentials.model_validate(payload)
        except (ClientError, BotoCoreError, ValueError, PydanticValidationError) as exc:
            # json.JSONDecodeError is a ValueError
            logger.exception("Error fetching secret %s", self.secret_id)
            raise CredentialRetrievalError(context={"secret_id": self.secret_id}) from exc
