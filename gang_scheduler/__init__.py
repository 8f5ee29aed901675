"""gang_scheduler: gang 准入 + 内存余量打分的调度插件"""
__version__ = "0.1.0"
