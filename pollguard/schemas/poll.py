from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from ..extensions import ma
from ..models.polls import Poll
from ..utils.sanitize import sanitize

MISSING_INPUT = "Please provide a question and at least two options."
QUESTION_TOO_LONG = f"Question is too long. Maximum {Poll.QUESTION_MAX_LENGTH} characters allowed."
OPTION_TOO_LONG = f"Options are too long. Maximum {Poll.OPTION_MAX_LENGTH} characters per option allowed."


class PollInputSchema(Schema):
    """Question/options as submitted for create and update, sanitized before validation."""

    class Meta:
        unknown = EXCLUDE

    question = fields.Str(
        required=True,
        validate=[
            validate.Length(min=1, error=MISSING_INPUT),
            validate.Length(max=Poll.QUESTION_MAX_LENGTH, error=QUESTION_TOO_LONG),
        ],
        error_messages={"required": MISSING_INPUT, "null": MISSING_INPUT},
    )
    options = fields.List(
        fields.Str(validate=validate.Length(max=Poll.OPTION_MAX_LENGTH, error=OPTION_TOO_LONG)),
        required=True,
        validate=validate.Length(min=Poll.MIN_OPTIONS, error=MISSING_INPUT),
        error_messages={"required": MISSING_INPUT, "null": MISSING_INPUT},
    )

    @pre_load
    def sanitize_input(self, data, **kwargs):
        data = dict(data)

        question = data.get("question")
        if isinstance(question, str):
            data["question"] = sanitize(question)

        options = data.get("options")
        if isinstance(options, (list, tuple)):
            cleaned = [sanitize(opt) if isinstance(opt, str) else opt for opt in options]
            # Blank entries are dropped rather than rejected
            data["options"] = [opt for opt in cleaned if opt not in ("", None)]

        return data


class PollReadSchema(ma.Schema):
    id = fields.UUID()
    owner_id = fields.UUID()
    question = fields.Str()
    options = fields.List(fields.Str())
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
