from django.test import SimpleTestCase

from shoelace.attributes import FieldOptions, is_blank, normalize_attrs, resolve_attributes
from shoelace.builder import BindingContext
from shoelace.exceptions import InvalidOptionError
from shoelace.host import MISSING

from .utils import make_context


def resolve(context, field_name, options=None, **kwargs):
    return resolve_attributes(FieldOptions.from_mapping(options), context, field_name, **kwargs)


class BoundValueTests(SimpleTestCase):
    def test_uses_bound_value_when_no_value_option(self):
        attrs = resolve(make_context(email="ana@example.com"), "email")

        self.assertEqual(attrs["value"], "ana@example.com")

    def test_explicit_value_wins_over_bound_value(self):
        attrs = resolve(make_context(email="ana@example.com"), "email", {"value": "bo@example.com"})

        self.assertEqual(attrs["value"], "bo@example.com")

    def test_blank_values_are_omitted(self):
        for value in ("", "   ", None, []):
            with self.subTest(value=value):
                attrs = resolve(make_context(email=value), "email")
                self.assertNotIn("value", attrs)

    def test_blank_explicit_value_is_omitted(self):
        attrs = resolve(make_context(email="ana@example.com"), "email", {"value": ""})

        self.assertNotIn("value", attrs)

    def test_missing_attribute_is_omitted(self):
        attrs = resolve(make_context(), "email")

        self.assertNotIn("value", attrs)

    def test_non_string_values_are_stringified(self):
        attrs = resolve(make_context(age=42), "age")

        self.assertEqual(attrs["value"], "42")

    def test_value_default_can_be_switched_off(self):
        attrs = resolve(make_context(fruit="pear"), "fruit", binds_value=False)

        self.assertNotIn("value", attrs)


class SizeAndTypeTests(SimpleTestCase):
    def test_size_defaults_to_maxlength(self):
        attrs = resolve(make_context(), "name", {"maxlength": 10})

        self.assertEqual(attrs["size"], 10)
        self.assertEqual(attrs["maxlength"], 10)

    def test_explicit_size_wins(self):
        attrs = resolve(make_context(), "name", {"maxlength": 10, "size": 4})

        self.assertEqual(attrs["size"], 4)

    def test_size_is_omitted_without_maxlength(self):
        attrs = resolve(make_context(), "name")

        self.assertNotIn("size", attrs)

    def test_size_default_can_be_switched_off(self):
        attrs = resolve(make_context(), "bio", {"maxlength": 10}, sizing=False)

        self.assertNotIn("size", attrs)

    def test_type_defaults_to_kind_tag(self):
        attrs = resolve(make_context(), "phone", type_tag="tel")

        self.assertEqual(attrs["type"], "tel")

    def test_explicit_type_wins(self):
        attrs = resolve(make_context(), "phone", {"type": "text"}, type_tag="tel")

        self.assertEqual(attrs["type"], "text")


class InvalidTests(SimpleTestCase):
    def test_errors_mark_the_field_invalid(self):
        context = make_context(errors={"email": ["Enter a valid email address."]})

        self.assertIs(resolve(context, "email")["invalid"], True)

    def test_no_errors_leave_invalid_out(self):
        context = make_context(errors={"name": ["Required."]})

        self.assertNotIn("invalid", resolve(context, "email"))

    def test_blank_messages_do_not_count(self):
        context = make_context(errors={"email": [""]})

        self.assertNotIn("invalid", resolve(context, "email"))

    def test_explicit_invalid_false_wins_over_errors(self):
        context = make_context(errors={"email": ["Enter a valid email address."]})

        attrs = resolve(context, "email", {"invalid": False})

        self.assertIs(attrs["invalid"], False)

    def test_explicit_invalid_none_suppresses_the_default(self):
        context = make_context(errors={"email": ["Enter a valid email address."]})

        self.assertNotIn("invalid", resolve(context, "email", {"invalid": None}))

    def test_invalid_must_be_boolean(self):
        with self.assertRaises(InvalidOptionError):
            resolve(make_context(), "email", {"invalid": "yes"})

    def test_invalid_option_error_is_a_type_error(self):
        with self.assertRaises(TypeError):
            FieldOptions.from_mapping({"disabled": 1})

    def test_validity_default_can_be_switched_off(self):
        context = make_context(errors={"fruit": ["Pick one."]})

        self.assertNotIn("invalid", resolve(context, "fruit", validity=False))


class NamingTests(SimpleTestCase):
    def test_name_and_id_derive_from_object_and_field(self):
        attrs = resolve(make_context(), "email")

        self.assertEqual(attrs["name"], "user-email")
        self.assertEqual(attrs["id"], "id_user-email")

    def test_no_object_name(self):
        attrs = resolve(make_context(object_name=""), "email")

        self.assertEqual(attrs["name"], "email")
        self.assertEqual(attrs["id"], "id_email")

    def test_explicit_name_and_id_win(self):
        attrs = resolve(make_context(), "email", {"name": "contact", "id": "contact-email"})

        self.assertEqual(attrs["name"], "contact")
        self.assertEqual(attrs["id"], "contact-email")

    def test_id_none_drops_the_id(self):
        self.assertNotIn("id", resolve(make_context(), "email", {"id": None}))

    def test_discriminator_is_folded_into_the_id(self):
        attrs = resolve(make_context(), "drinks", discriminator="Red Wine")

        self.assertEqual(attrs["name"], "user-drinks")
        self.assertEqual(attrs["id"], "id_user-drinks_red_wine")


class NormalizeAttrsTests(SimpleTestCase):
    def test_keys_are_lower_case_with_hyphens(self):
        attrs = normalize_attrs({"Help_Text": "Hint", "class_": "wide", "toggle_password": True})

        self.assertEqual(attrs, {"help-text": "Hint", "class": "wide", "toggle-password": True})

    def test_data_and_aria_mappings_are_flattened(self):
        attrs = normalize_attrs({"data": {"remote": True, "confirm": "Sure?"}, "aria": {"label": "Name"}})

        self.assertEqual(
            attrs,
            {"data-remote": "true", "data-confirm": "Sure?", "aria-label": "Name"},
        )

    def test_input_mapping_is_not_modified(self):
        options = {"maxlength": 10, "data": {"remote": True}}

        FieldOptions.from_mapping(options)

        self.assertEqual(options, {"maxlength": 10, "data": {"remote": True}})

    def test_is_blank(self):
        self.assertTrue(is_blank(MISSING))
        self.assertTrue(is_blank(" "))
        self.assertFalse(is_blank(0))
        self.assertFalse(is_blank(False))


class BindingContextTests(SimpleTestCase):
    def test_without_object_there_is_no_value_or_error(self):
        context = BindingContext.for_object(None, "user")

        self.assertIs(context.value("email"), MISSING)
        self.assertEqual(context.errors_for("email"), [])

    def test_mapping_objects_are_read_by_key(self):
        context = BindingContext.for_object({"email": "ana@example.com"}, "user")

        self.assertEqual(context.value("email"), "ana@example.com")
        self.assertIs(context.value("name"), MISSING)
