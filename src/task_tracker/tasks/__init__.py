"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) and record (de)serialization
- task_store.py: JSON file storage, whole collection read/written as one document
- task_repo.py: in-memory add/list/update/status/delete over the loaded collection
- errors.py: storage, lookup, validation and usage errors
"""
