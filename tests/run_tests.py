"""测试运行器

只运行 unittest.TestCase 测试类，完整测试请使用 pytest。
"""

import unittest
import sys
import os
from typing import List

# 不包含测试用例的辅助模块
HELPER_MODULES = {'test_data', 'test_utils'}


def discover_tests() -> List[str]:
    """发现测试文件

    Returns:
        List[str]: 测试模块列表
    """
    test_modules = []
    for file in sorted(os.listdir(os.path.dirname(os.path.abspath(__file__)))):
        if file.startswith('test_') and file.endswith('.py') and file[:-3] not in HELPER_MODULES:
            test_modules.append(f'tests.{file[:-3]}')
    return test_modules


def run_tests() -> bool:
    """运行所有测试"""
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module_name in discover_tests():
        suite.addTests(loader.loadTestsFromName(module_name))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == '__main__':
    # 添加项目根目录到Python路径
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

    success = run_tests()
    sys.exit(0 if success else 1)
