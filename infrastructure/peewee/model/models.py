from peewee import AutoField, CharField, DateTimeField, Model, TextField

from infrastructure.peewee.session.db import db


class TaskModel(Model):
    # seq conserva el orden de inserción; task_id es el identificador público
    seq = AutoField()
    task_id = CharField(unique=True, max_length=36)
    title = CharField()
    description = TextField(default="")
    priority = CharField(max_length=16, default="Medium")
    due_date = DateTimeField(null=True)
    status = CharField(max_length=16, default="To Do")
    created_at = DateTimeField()
    updated_at = DateTimeField()

    class Meta:
        database = db
        table_name = "tasks"
        indexes = (
            (("status", "priority"), False),
            (("due_date",), False),
        )
