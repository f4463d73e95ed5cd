"""Settings package for the FitBuddy project.

`base.py` contains configuration shared across environments; `dev.py`,
`prod.py` and `test.py` extend it with environment specific overrides.
Select one with DJANGO_SETTINGS_MODULE.
"""
