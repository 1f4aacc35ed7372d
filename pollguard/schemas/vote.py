from marshmallow import Schema, fields


class VoteSubmitSchema(Schema):
    option_index = fields.Int(required=True, strict=True)
