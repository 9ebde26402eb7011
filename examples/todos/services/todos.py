class MemoryBackend:
    """In-memory todo storage."""

    def __init__(self, todos=None):
        self._todos = list(todos or [])

    def add(self, title):
        todo = {'id': len(self._todos) + 1, 'title': title, 'done': False}
        self._todos.append(todo)
        return todo

    def find(self, limit=None):
        return list(self._todos[:limit])


class TodosRepository:
    def __init__(self, backend, page_size=20):
        self.backend = backend
        self.page_size = page_size

    def get_todos(self):
        return self.backend.find(limit=self.page_size)
