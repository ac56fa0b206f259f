"""
Tests for Organization model.
"""

import pytest
from django.db import IntegrityError

from .factories import OrganizationFactory


@pytest.mark.django_db
class TestOrganizationModel:
    def test_str(self) -> None:
        org = OrganizationFactory.create(name="Acme")

        assert str(org) == "Acme"

    def test_name_unique(self) -> None:
        OrganizationFactory.create(name="Acme")

        with pytest.raises(IntegrityError):
            OrganizationFactory.create(name="Acme")
