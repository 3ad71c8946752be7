"""系统时钟适配器"""

import time


class SystemClock:
    """以系统时间实现 ClockPort"""

    def now_millis(self) -> int:
        return int(time.time() * 1000)
