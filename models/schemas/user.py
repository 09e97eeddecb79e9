from marshmallow import Schema, fields, validate, EXCLUDE

# matches User.username (String(255))
USERNAME_MAX_LENGTH = 255


class CredentialsSchema(Schema):
    """Body of /register and /login. Presence is checked by the auth service."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(
        load_default=None, allow_none=True, validate=validate.Length(max=USERNAME_MAX_LENGTH)
    )
    password = fields.String(load_default=None, allow_none=True, load_only=True)


class UserOutSchema(Schema):
    id = fields.String(allow_none=False)
    username = fields.String(allow_none=False)
