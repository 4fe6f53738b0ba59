"""
Canned reports offered from the main menu.

Each report is a fixed SQL string; only ListKCarsWithTheMostServices
takes a parameter (how many cars to list).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Report:
    name: str       # Also used as the export file name
    title: str
    sql: str
    needs_limit: bool = False


CUSTOMERS_WITH_BILL_LESS_THAN_100 = Report(
    name="customers_with_bill_less_than_100",
    title="Listing customers with a closed request billed under 100: ",
    sql="""
        SELECT C.fname, C.lname, CR.date, CR.comment, CR.bill
        FROM Customer C, Service_Request S, Closed_Request CR
        WHERE C.id = S.customer_id AND S.rid = CR.rid AND CR.bill < 100
        ORDER BY CR.bill
    """,
)

CUSTOMERS_WITH_MORE_THAN_20_CARS = Report(
    name="customers_with_more_than_20_cars",
    title="Listing first and last name of Customers with more than 20 Cars: ",
    sql="""
        SELECT C.fname, C.lname
        FROM Customer C
        WHERE C.id IN (SELECT customer_id FROM Owns GROUP BY customer_id HAVING COUNT(*) > 20)
    """,
)

CARS_BEFORE_1995_WITH_50000_MILES = Report(
    name="cars_before_1995_with_50000_miles",
    title="Listing all cars built before 1995 having less than 50,000 miles: ",
    sql="""
        SELECT C.make, C.model, C.year
        FROM Car C
        WHERE C.year < 1995
          AND C.vin IN (SELECT S.car_vin FROM Service_Request S WHERE S.odometer < 50000)
    """,
)

K_CARS_WITH_THE_MOST_SERVICES = Report(
    name="k_cars_with_the_most_services",
    title="Listing the cars with the most service requests: ",
    sql="""
        SELECT C.make, C.model, COUNT(S.rid) AS services
        FROM Car C, Service_Request S
        WHERE C.vin = S.car_vin
        GROUP BY C.vin, C.make, C.model
        ORDER BY services DESC, C.vin
        LIMIT ?
    """,
    needs_limit=True,
)

CUSTOMERS_BY_TOTAL_BILL = Report(
    name="customers_by_total_bill",
    title="Listing customers in descending order of their total bill: ",
    sql="""
        SELECT C.fname, C.lname, SUM(CR.bill) AS total_bill
        FROM Customer C, Service_Request S, Closed_Request CR
        WHERE C.id = S.customer_id AND S.rid = CR.rid
        GROUP BY C.id, C.fname, C.lname
        ORDER BY total_bill DESC
    """,
)
