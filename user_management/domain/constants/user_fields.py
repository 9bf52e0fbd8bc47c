"""Constants for User model field names"""


class UserFields:
    """Field name constants for User model"""
    ID = "id"
    FIRSTNAME = "firstname"
    LASTNAME = "lastname"
    AGE = "age"
    
    # Fields a client may change on an existing user
    EDITABLE = (FIRSTNAME, LASTNAME, AGE)
    
    # Error body returned by the user API
    MESSAGE = "message"


class OperationKeys:
    """Keys marking in-flight page operations"""
    CREATE = "create"
    
    @staticmethod
    def delete(user_id: str) -> str:
        return f"delete-{user_id}"
    
    @staticmethod
    def update(user_id: str) -> str:
        return f"update-{user_id}"
