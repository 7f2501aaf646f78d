"""
通用工具：文件读写、交互输入、链选择。
"""
