from vaxi_backend.core.permissions import RBACPermission


class VaccineCatalogPermission(RBACPermission):
    """Catalog is readable by every role; changes go through the admin."""

    read_roles = {"admin", "clinician", "member"}
    write_roles = {"admin"}
