"""Site form submissions.

Module scope:
- `submissions`: required-field and email validation for the resource-request
  and contact forms.
- `relay`: delivery of validated submissions through the EmailJS REST API.
"""
