from abc import ABC, abstractmethod
from datetime import date

from tracker.models.expense import ExpenseEntry
from tracker.models.partner import Partner, Resource
from tracker.models.timesheet import TimesheetEntry


class ProjectDataRepository(ABC):
    @abstractmethod
    def create_partner(self, partner: Partner) -> Partner: ...

    @abstractmethod
    def get_partner(self, partner_id: int) -> Partner | None: ...

    @abstractmethod
    def list_partners(self, active_only: bool = False) -> list[Partner]: ...

    @abstractmethod
    def create_resource(self, resource: Resource) -> Resource: ...

    @abstractmethod
    def list_resources(self) -> list[Resource]: ...

    @abstractmethod
    def add_timesheet(self, entry: TimesheetEntry) -> TimesheetEntry: ...

    @abstractmethod
    def list_timesheets(self, resource_ids: list[int], start: date, end: date) -> list[TimesheetEntry]: ...

    @abstractmethod
    def add_expense(self, entry: ExpenseEntry) -> ExpenseEntry: ...

    @abstractmethod
    def list_expenses(self, resource_ids: list[int], start: date, end: date) -> list[ExpenseEntry]: ...
