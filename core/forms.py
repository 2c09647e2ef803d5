"""Forms for the sign-in workflow."""

from __future__ import annotations

from django import forms


class LoginForm(forms.Form):
    """Collect the credentials forwarded to the identity provider.

    Credentials are never checked locally; the provider is the only authority.
    """

    username = forms.CharField(
        label="Username or email",
        max_length=255,
        widget=forms.TextInput(attrs={"autocomplete": "username", "autofocus": True}),
    )
    password = forms.CharField(
        label="Password",
        strip=False,
        widget=forms.PasswordInput(attrs={"autocomplete": "current-password"}),
    )
