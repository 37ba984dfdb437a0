from datetime import datetime, timedelta, timezone
from unittest import TestCase

from octopotion import fields, Plan
from octopotion.exceptions import ValidationError


class FieldsTestCase(TestCase):

    def test_raw_schema(self):
        foo = fields.Raw({"type": "string"})

        self.assertEqual({"type": "string"}, foo.response)
        self.assertEqual({"type": "string"}, foo.request)

        # NOTE format is (response, request)
        foo_rw = fields.Raw((
            {"type": "string"},
            {"type": "number"}
        ))
        self.assertEqual({"type": "string"}, foo_rw.response)
        self.assertEqual({"type": "number"}, foo_rw.request)

        type_, foo_callable = None, fields.Raw(lambda: {"type": type_})
        type_ = "boolean"
        self.assertEqual({"type": "boolean"}, foo_callable.response)

    def test_raw_nullable(self):
        foo_type_string = fields.Raw({"type": "string"}, nullable=True)
        self.assertEqual({"type": ["string", "null"]}, foo_type_string.response)

        foo_type_array = fields.Raw({"type": ["string", "number"]}, nullable=True)
        self.assertEqual({"type": ["string", "number", "null"]}, foo_type_array.response)

        foo_enum = fields.String(enum=['open', 'closed'], nullable=True)
        self.assertEqual({"type": ["string", "null"], "enum": ['open', 'closed', None]}, foo_enum.response)

        foo_ref = fields.Raw({"$ref": "#"}, nullable=True)
        self.assertEqual({"anyOf": [{"$ref": "#"}, {"type": "null"}]}, foo_ref.response)

    def test_raw_default(self):
        self.assertEqual({"type": "integer", "default": 0}, fields.Integer(default=0).response)
        self.assertEqual("master", fields.String(default=lambda: "master").default)

    def test_string_schema(self):
        self.assertEqual({
            "type": "string",
            "minLength": 1,
            "maxLength": 39,
            "pattern": "^[a-z]+$",
            "description": "login"
        }, fields.String(min_length=1, max_length=39, pattern="^[a-z]+$", description="login").response)

    def test_string_convert(self):
        field = fields.String(min_length=2)
        self.assertEqual("ab", field.convert("ab"))

        with self.assertRaises(ValidationError):
            field.convert("a")

        with self.assertRaises(ValidationError):
            field.convert(1)

        self.assertEqual(1, field.convert(1, validate=False))

    def test_integer_convert(self):
        field = fields.Integer(minimum=1)
        self.assertEqual(5, field.convert(5))
        self.assertEqual(5, field.format(5.0))

        with self.assertRaises(ValidationError):
            field.convert(0)

    def test_boolean_format(self):
        self.assertEqual(True, fields.Boolean().format(1))
        self.assertEqual(False, fields.Boolean().format(None))

    def test_uri_and_email_schema(self):
        self.assertEqual({"type": "string", "format": "uri"}, fields.Uri().response)
        self.assertEqual({"type": "string", "format": "email"}, fields.Email().response)

    def test_date_time_string_convert(self):
        field = fields.DateTimeString()

        self.assertEqual(datetime(2009, 3, 19, 21, 0, 6, tzinfo=timezone.utc),
                         field.convert('2009-03-19T21:00:06Z'))
        self.assertEqual(datetime(2009, 3, 19, 14, 0, 6, tzinfo=timezone(timedelta(hours=-7))),
                         field.convert('2009-03-19T14:00:06-07:00', validate=False))
        self.assertEqual('2009-03-19T21:00:06+00:00',
                         field.format(datetime(2009, 3, 19, 21, 0, 6, tzinfo=timezone.utc)))

        self.assertEqual(datetime(2009, 3, 19, 21, 0, 6, tzinfo=timezone.utc),
                         field.convert('2009/03/19 14:00:06 -0700', validate=False))

        with self.assertRaises(ValueError):
            field.convert('yesterday', validate=False)

        with self.assertRaises(ValueError):
            fields.DateTimeString(fallback_format=None).convert('2009/03/19 14:00:06 -0700', validate=False)

    def test_inline_convert(self):
        field = fields.Inline(Plan)

        plan = field.convert({'name': 'micro', 'collaborators': 1, 'space': 614400, 'private_repos': 5},
                             validate=False)

        self.assertIsInstance(plan, Plan)
        self.assertEqual('micro', plan.name)
        self.assertEqual(614400, plan.space)
        self.assertIs(plan, field.convert(plan, validate=False))
        self.assertEqual({'collaborators': 1, 'name': 'micro', 'private_repos': 5, 'space': 614400},
                         dict(field.format(plan)))

    def test_inline_schema(self):
        self.assertEqual({
            "type": "object",
            "properties": {
                "collaborators": {"type": "integer"},
                "name": {"type": "string"},
                "private_repos": {"type": "integer"},
                "space": {"type": "integer"}
            }
        }, fields.Inline(Plan).response)
