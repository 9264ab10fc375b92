"""Example: drive the client services without any UI.

Marks the first student of the first class for today, then prints the
student-side calendar for the same token.
"""

import asyncio
import os
from datetime import date

from attendance_client.main import create_client


async def main():
    container = create_client(token=os.getenv("API_TOKEN"))
    try:
        await container.cache.refresh_all(include_users=True)
        if not container.cache.classes:
            print("No classes available")
            return

        view = await container.attendance_editor.select(container.cache.classes[0], date.today())
        if view and view.controls:
            container.attendance_editor.activate(view.controls[0].roll_number)
            await container.attendance_editor.drain()
        print(container.attendance_editor.view())
        for notice in container.attendance_editor.drain_notices():
            print(f"[{notice.category}] {notice.message}")

        mine = await container.student_attendance_service.load()
        print(f"{mine.percentage}% between {mine.date_range.start} and {mine.date_range.end}")
    finally:
        await container.aclose()


if __name__ == "__main__":
    asyncio.run(main())
