"""Business logic: key naming, retrying writes, public access, listing, URL mapping and the FileService facade."""
