from app.db.models.todos import Todo
from app.db.repositories.todos import TodoQuery


class TestTodoService:
    def test_add_one(self, service):
        todo = service.add_one("Buy milk")

        assert todo.id is not None
        assert todo.is_done is False
        assert service.count() == 1

    def test_add_many_keeps_order(self, service):
        todos = service.add_many(["Write report", ("Read book", True), "Do workout"])

        assert [t.title for t in todos] == ["Write report", "Read book", "Do workout"]
        assert [t.is_done for t in todos] == [False, True, False]
        assert todos[0].id < todos[1].id < todos[2].id

    def test_mark_done(self, service, StoreFactory):
        service.add_one("Buy milk")

        todo = service.mark_done("Buy milk")

        assert todo.is_done is True
        fetched = StoreFactory().find_first(TodoQuery(title="Buy milk"))
        assert fetched.is_done is True

    def test_mark_done_not_found(self, service):
        assert service.mark_done("Nope") is None

    def test_mark_done_matching(self, service):
        service.add_one("Buy milk")
        service.add_many(["Write report", "Read book", "Do workout"])

        todos = service.mark_done_matching("Read", "Write")

        assert [t.title for t in todos] == ["Write report", "Read book"]
        assert service.count(TodoQuery(is_done=True)) == 2

    def test_delete_by_title(self, service):
        service.add_many(["Buy milk", "Do workout"])

        deleted = service.delete_by_title("Do workout")

        assert deleted.title == "Do workout"
        assert service.count() == 1
        assert service.delete_by_title("Do workout") is None

    def test_delete_done(self, service):
        service.add_many([("Task A", False), ("Task B", True), ("Task C", True)])

        deleted = service.delete_done()

        assert [t.title for t in deleted] == ["Task B", "Task C"]
        assert service.count(TodoQuery(is_done=True)) == 0
        assert service.count() == 1

    def test_first_open_and_list_open(self, service):
        assert service.first_open() is None

        service.add_many([("Task A", False), ("Task B", False), ("Task C", True)])

        assert service.first_open().title == "Task A"
        assert [t.title for t in service.list_open()] == ["Task A", "Task B"]

    def test_count_with_raw_clause(self, service):
        service.add_many([("Task A", False), ("Task C", True)])
        assert service.count(Todo.title.startswith("Task")) == 2
