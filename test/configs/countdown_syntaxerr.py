expires = (
