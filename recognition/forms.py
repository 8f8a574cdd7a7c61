"""
Django Forms for the Recognition Platform
=========================================

Handles validation and rendering of the nomination form.

Free-text fields are kept exactly as typed (no stripping or case changes);
the only validation is that required fields are not blank.
"""

from django import forms # pyright: ignore[reportMissingModuleSource]
from django.core.exceptions import ValidationError # pyright: ignore[reportMissingModuleSource]
from django.utils.translation import gettext_lazy as _ # pyright: ignore[reportMissingModuleSource]

from .catalog import CATALOG
from .models import Nomination


class NominationForm(forms.ModelForm):
    """
    Form for recognizing a colleague.

    Validates:
    - Nominee name (required, not blank)
    - Reason (required, not blank)
    - Department, location and category (must come from the catalog)

    `keywords` is not stored; it only feeds the AI draft helper.
    """

    nominee_name = forms.CharField(
        strip=False,
        max_length=200,
        label=_("Colleague's Full Name"),
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Who are we celebrating today?'),
        }),
    )
    nominee_department = forms.ChoiceField(
        choices=CATALOG.department_choices(),
        initial=CATALOG.departments[0],
        label=_('Department'),
    )
    nominee_location = forms.ChoiceField(
        choices=CATALOG.location_choices(),
        initial=CATALOG.locations[0],
        label=_('Location Hub'),
    )
    category_id = forms.ChoiceField(
        choices=CATALOG.category_choices(),
        initial=CATALOG.categories[0].id,
        widget=forms.RadioSelect,
        label=_('Award Category'),
    )
    reason = forms.CharField(
        strip=False,
        max_length=4000,
        label=_('Recognition Narrative'),
        widget=forms.Textarea(attrs={
            'class': 'form-control',
            'rows': 6,
            'placeholder': _('Share the impact this associate has made...'),
        }),
    )
    keywords = forms.CharField(
        required=False,
        max_length=300,
        label=_('Keywords for AI draft'),
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Add keywords...'),
        }),
    )

    class Meta:
        model = Nomination
        fields = ['nominee_name', 'nominee_department', 'nominee_location', 'category_id', 'reason']

    def clean_nominee_name(self):
        """Reject names that are only whitespace."""
        name = self.cleaned_data.get('nominee_name', '')
        if not name.strip():
            raise ValidationError(_('Nominee name is required.'))
        return name

    def clean_reason(self):
        reason = self.cleaned_data.get('reason', '')
        if not reason.strip():
            raise ValidationError(_('Please share a reason for this recognition.'))
        return reason

    def nomination_fields(self):
        """Cleaned values in the shape the Record Store inserts."""
        return {name: self.cleaned_data[name] for name in self.Meta.fields}

    def selected_category(self):
        """Category chosen in the submitted or initial data, falling back to the first one."""
        source = self.data if self.is_bound else self.initial
        category_id = source.get('category_id')
        return CATALOG.get_category(category_id or '') or CATALOG.categories[0]

