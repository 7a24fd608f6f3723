from types import SimpleNamespace

from django import forms

from shoelace.builder import BindingContext


class ProfileForm(forms.Form):
    name = forms.CharField(max_length=20)
    email = forms.EmailField(max_length=40)
    bio = forms.CharField(widget=forms.Textarea, required=False)
    newsletter = forms.BooleanField(required=False)
    fruit = forms.ChoiceField(choices=[("apple", "Apple"), ("pear", "Pear")])
    token = forms.CharField(widget=forms.HiddenInput, required=False)


def make_context(object_name="user", errors=None, **values):
    """Context bound to a plain object carrying ``values`` and ``errors``."""

    obj = SimpleNamespace(errors=errors or {}, **values)
    return BindingContext.for_object(obj, object_name)
