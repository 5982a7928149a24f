from leave_mgmt.models import Employee


def get_active_by_auth_id(auth_id: str):
    """
    Active Employee whose auth_id matches the token subject, or None.
    """
    if not auth_id:
        return None
    return Employee.objects.filter(auth_id=str(auth_id), is_active=True).first()
